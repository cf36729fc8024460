"""Base repository class with common CRUD operations."""

from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from core.db import Base

T = TypeVar("T", bound=Base)


class BaseRepository(Generic[T]):
    """
    Base repository providing common CRUD operations over one session.

    Usage:
        class ConsultantRepository(BaseRepository[Consultant]):
            model = Consultant

        repo = ConsultantRepository(session)
        consultant = repo.get_by_id(1)
    """

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, id: int) -> T | None:
        """Get a single record by primary key, reloaded from the database."""
        return self.session.get(self.model, id, populate_existing=True)

    def create(self, **kwargs) -> T:
        """Create a new record and flush it so generated keys are populated."""
        instance = self.model(**kwargs)
        self.session.add(instance)
        self.session.flush()
        return instance

