# database/repositories/base_repository.py
"""
Base repository pattern implementation.
Repositories work inside a session owned by the caller, so several of them
can take part in one transaction.
"""

from typing import Generic, Type, TypeVar

from sqlalchemy.orm import Session

from database.base import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Common operations shared by the entity repositories.
    """

    def __init__(self, session: Session, model_class: Type[T]):
        """
        Args:
            session: Open session of the enclosing transaction
            model_class: SQLAlchemy model class for this repository

        Raises:
            ValueError: If model_class is not a mapped model
        """
        if not issubclass(model_class, Base):
            raise ValueError("model_class must be a SQLAlchemy model")

        self.session = session
        self.model_class = model_class

    def add(self, entity: T) -> T:
        """
        Stage a new entity and flush so generated keys are available.
        """
        self.session.add(entity)
        self.session.flush()
        return entity
