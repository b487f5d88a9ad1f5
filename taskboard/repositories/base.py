"""Base repository pattern with common operations.

Repositories wrap an injected SQLModel session and translate between table
entities and the Pydantic business models the engine and service consume.
Nothing here commits; transaction boundaries belong to the service layer.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import func
from sqlmodel import Session, select

from ..schemas.unified_models import utc_now


EntityT = TypeVar("EntityT")
BusinessT = TypeVar("BusinessT", bound=BaseModel)


class BaseRepository(Generic[EntityT, BusinessT], ABC):
    """Session-bound data access for one table and its business model."""

    def __init__(self, session: Session):
        self.session = session

    @abstractmethod
    def get_entity_class(self) -> type[EntityT]:
        """Return the SQLModel entity class."""

    @abstractmethod
    def get_business_class(self) -> type[BusinessT]:
        """Return the Pydantic business model class."""

    def to_business(self, entity: EntityT) -> BusinessT:
        """Read the business model's fields off a loaded entity."""
        return self.get_business_class().model_validate(entity, from_attributes=True)

    def create(self, business_model: BusinessT, **overrides: Any) -> EntityT:
        """Insert an entity built from the explicitly set business fields."""
        entity_data = business_model.model_dump(exclude_unset=True)
        entity_data.update(overrides)
        entity = self.get_entity_class()(**entity_data)
        self.session.add(entity)
        self.session.flush()
        return entity

    def get_by_id(self, entity_id: int) -> EntityT | None:
        return self.session.get(self.get_entity_class(), entity_id)

    def get_business(self, entity_id: int) -> BusinessT | None:
        """Business view of a single entity, or None if it does not exist."""
        entity = self.get_by_id(entity_id)
        return self.to_business(entity) if entity is not None else None

    def find(self, *criteria: Any, order_by: tuple = ()) -> list[EntityT]:
        """Entities matching every criterion, ordered by id unless told otherwise."""
        entity_class = self.get_entity_class()
        statement = select(entity_class).where(*criteria)
        statement = statement.order_by(*(order_by or (entity_class.id,)))
        return list(self.session.exec(statement).all())

    def update(self, entity_id: int, updates: dict[str, Any]) -> EntityT | None:
        """Apply ``updates`` to known attributes and bump ``updated_at``."""
        entity = self.get_by_id(entity_id)
        if entity is None:
            return None

        for key, value in updates.items():
            if hasattr(entity, key):
                setattr(entity, key, value)
        if hasattr(entity, "updated_at"):
            entity.updated_at = utc_now()
        self.session.add(entity)
        self.session.flush()
        return entity

    def delete(self, entity_id: int) -> bool:
        entity = self.get_by_id(entity_id)
        if entity is None:
            return False
        self.session.delete(entity)
        self.session.flush()
        return True

    def delete_where(self, *criteria: Any) -> int:
        """Delete matching entities one by one through the session; returns the count."""
        entities = self.find(*criteria)
        for entity in entities:
            self.session.delete(entity)
        self.session.flush()
        return len(entities)

    def count(self) -> int:
        statement = select(func.count()).select_from(self.get_entity_class())
        return self.session.exec(statement).one()

    def exists(self, entity_id: int) -> bool:
        return self.get_by_id(entity_id) is not None
