import logging
from typing import Any, Dict

from sqlalchemy import delete, insert, inspect, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tripsplit.core.errors import StorageError

logger = logging.getLogger(__name__)


def snapshot(record) -> Dict[str, Any]:
    """Column values of a loaded row, enough to re-insert it later."""
    return {c.key: getattr(record, c.key) for c in record.__table__.columns}


class RecordStore:
    """
    Single-record persistence on top of an AsyncSession.

    Every write is committed on its own, like a hosted REST store with no
    multi-table transactions. Callers that need several writes to succeed
    or fail together use ``WriteCoordinator``.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert(self, record):
        self.db.add(record)
        await self._commit(f"insert into {record.__tablename__}")
        await self.db.refresh(record)
        return record

    async def update_by_id(self, model, record_id, **values):
        await self._execute(
            update(model).where(model.id == record_id).values(**values),
            f"update {model.__tablename__} {record_id}",
        )

    async def delete_by_id(self, model, record_id):
        await self._execute(
            delete(model).where(model.id == record_id),
            f"delete from {model.__tablename__} {record_id}",
        )

    async def delete_where(self, model, *criteria):
        await self._execute(
            delete(model).where(*criteria),
            f"delete from {model.__tablename__}",
        )

    async def remove(self, record):
        # identity survives expiry, so this is safe after a failed commit
        (record_id,) = inspect(record).identity
        await self.delete_by_id(type(record), record_id)

    async def restore(self, model, values: Dict[str, Any]):
        # plain INSERT so a stale instance in the identity map cannot clash
        await self._execute(
            insert(model).values(**values),
            f"restore {model.__tablename__} {values.get('id')}",
        )

    async def query(self, stmt):
        try:
            res = await self.db.execute(stmt)
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", e)
            raise StorageError("Query failed") from e
        return res.scalars().all()

    async def _execute(self, stmt, what: str):
        try:
            await self.db.execute(stmt)
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Storage error during %s: %s", what, e)
            raise StorageError(f"Failed to {what}") from e
        await self._commit(what)

    async def _commit(self, what: str):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Storage error during %s: %s", what, e)
            raise StorageError(f"Failed to {what}") from e
