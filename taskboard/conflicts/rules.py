"""Thresholds used by the conflict engine."""

from pydantic import ConfigDict, Field, model_validator

from ..schemas.unified_models import BaseBusinessModel, UnifiedConfig


DEFAULT_DAILY_HOURS_LIMIT = 8.0
DEFAULT_OVERLOAD_MEDIUM_HOURS = 10.0
DEFAULT_OVERLOAD_HIGH_HOURS = 12.0
DEFAULT_OVERLAP_MEDIUM_DAYS = 3
DEFAULT_OVERLAP_HIGH_DAYS = 7
DEFAULT_SHORT_OVERLAP_DAYS = 2


class ConflictRules(BaseBusinessModel):
    """Immutable threshold set for overlap and overload classification."""

    model_config = ConfigDict(**{**UnifiedConfig.PYDANTIC_CONFIG, "frozen": True})

    daily_hours_limit: float = Field(default=DEFAULT_DAILY_HOURS_LIMIT, gt=0.0)
    overload_medium_hours: float = Field(
        default=DEFAULT_OVERLOAD_MEDIUM_HOURS, gt=0.0
    )
    overload_high_hours: float = Field(default=DEFAULT_OVERLOAD_HIGH_HOURS, gt=0.0)
    overlap_medium_days: int = Field(default=DEFAULT_OVERLAP_MEDIUM_DAYS, ge=1)
    overlap_high_days: int = Field(default=DEFAULT_OVERLAP_HIGH_DAYS, ge=1)
    short_overlap_days: int = Field(default=DEFAULT_SHORT_OVERLAP_DAYS, ge=0)

    @model_validator(mode="after")
    def validate_ordering(self) -> "ConflictRules":
        """Medium thresholds must sit below high thresholds."""
        if self.overload_medium_hours >= self.overload_high_hours:
            raise ValueError("overload_medium_hours must be below overload_high_hours")
        if self.overlap_medium_days >= self.overlap_high_days:
            raise ValueError("overlap_medium_days must be below overlap_high_days")
        return self


DEFAULT_RULES = ConflictRules()
