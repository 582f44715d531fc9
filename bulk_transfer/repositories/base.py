"""Repository abstractions for async database access.

Repositories receive a session factory rather than a session: every public
operation opens its own session, and every write runs inside its own
transaction that is committed on success and rolled back on any storage
error. Storage exceptions never leave a repository; they are logged and turned
into ``Failure(DATABASE_ERROR)`` outcomes.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bulk_transfer.core.outcome import Failure, StoreErrorCode
from bulk_transfer.db.base import Base

ModelT = TypeVar("ModelT", bound=Base)

logger = logging.getLogger(__name__)


class Repository(Generic[ModelT]):
    """Base repository providing query and failure helpers."""

    model: type[ModelT]

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    def _base_query(self) -> Select[tuple[ModelT]]:
        return select(self.model)

    async def _fetch_all(self, statement: Select[tuple[ModelT]]) -> Sequence[ModelT]:
        async with self.session_factory() as session:
            return (await session.scalars(statement)).all()

    async def _fetch_first(self, statement: Select[tuple[ModelT]]) -> ModelT | None:
        async with self.session_factory() as session:
            return (await session.scalars(statement.limit(1))).first()

    def _read_failure(self, **context: Any) -> Failure[StoreErrorCode]:
        logger.exception("Cannot get db values", extra={"table": self.model.__tablename__, **context})
        return Failure(StoreErrorCode.DATABASE_ERROR, "Cannot get values")

    def _write_failure(self, **context: Any) -> Failure[StoreErrorCode]:
        logger.exception("Cannot save into db", extra={"table": self.model.__tablename__, **context})
        return Failure(StoreErrorCode.DATABASE_ERROR, "Cannot save into the db")
