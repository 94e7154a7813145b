"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Generic, TypeVar, Optional, List, Type, Iterable
from sqlalchemy.orm import Session
from abc import ABC

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository providing common CRUD operations.
    All repositories should inherit from this class.

    Write helpers accept ``commit=False`` so that services can chain several
    writes (cascades) and commit them as a single transaction.
    """

    def __init__(self, db: Session, model: Type[ModelType]):
        self.db = db
        self.model = model

    def get_by_id(self, entity_id: int) -> Optional[ModelType]:
        """Get entity by ID, or None if not found"""
        return self.db.get(self.model, entity_id)

    def get_by_ids(self, entity_ids: Iterable[int]) -> List[ModelType]:
        """Get entities matching the given IDs, ordered by ID"""
        ids = list(dict.fromkeys(entity_ids))
        if not ids:
            return []
        return (
            self.db.query(self.model)
            .filter(self.model.id.in_(ids))
            .order_by(self.model.id)
            .all()
        )

    def create(self, entity: ModelType, commit: bool = True) -> ModelType:
        """Create new entity"""
        self.db.add(entity)
        if commit:
            self.db.commit()
            self.db.refresh(entity)
        else:
            self.db.flush()
        return entity

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists"""
        return self.get_by_id(entity_id) is not None
