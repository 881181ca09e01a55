import logging
from typing import Sequence

from sqlalchemy import delete, select, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app import models
from app.errors import StorageUnavailableError
from app.schemas import Category, Record

logger = logging.getLogger(__name__)

TABLES = {
    Category.LOCATION: models.Location,
    Category.WEATHER: models.WeatherEntry,
    Category.EVENTS: models.EventEntry,
    Category.MOVIES: models.MovieEntry,
}


def _to_row(category: Category, record: Record):
    return TABLES[category](**record.model_dump(exclude={"kind"}, exclude_none=True))


class CacheStore:
    """Exact-match cache over one table per category, bound to a request's session."""

    def __init__(self, db: Session):
        self.db = db

    def find_by_key(self, category: Category, key: str) -> list:
        table = TABLES[category]
        stmt = select(table).where(table.search_query == key).order_by(table.id)
        try:
            return list(self.db.scalars(stmt))
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailableError(f"Could not read {category.value} cache: {exc}") from exc

    def insert(self, category: Category, record: Record):
        row = _to_row(category, record)
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailableError(f"Could not write {category.value} row: {exc}") from exc
        self.db.refresh(row)
        return row

    def _lock_key(self, category: Category, key: str) -> None:
        """
        Serialize writers of the same key until this transaction ends.

        Under READ COMMITTED two racing DELETEs each match nothing and both
        batches survive, so Postgres needs an advisory lock. SQLite already
        holds its database write lock from the DELETE until commit.
        """
        if self.db.get_bind().dialect.name == "postgresql":
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:lock_key))"),
                {"lock_key": f"{TABLES[category].__tablename__}:{key}"},
            )

    def replace(self, category: Category, key: str, records: Sequence[Record]) -> list:
        """Store `records` as the only batch cached under `key`, in one transaction."""
        table = TABLES[category]
        rows = [_to_row(category, record) for record in records]
        try:
            self._lock_key(category, key)
            self.db.execute(delete(table).where(table.search_query == key))
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise StorageUnavailableError(f"Could not write {category.value} batch: {exc}") from exc
        logger.debug("Stored %d %s row(s) for %r", len(rows), category.value, key)
        return rows
