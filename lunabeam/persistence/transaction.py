"""PostgreSQL transaction boundary."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from lunabeam.domain.error import PersistenceError
from lunabeam.domain.repository import TransactionManager


class PostgresTransactionManager(TransactionManager):
    """Runs a block inside a savepoint of the request session.

    The request session is committed when the request ends; the savepoint
    lets a failed block be rolled back on its own.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[None]:
        try:
            async with self.session.begin_nested():
                yield
        except SQLAlchemyError as e:
            logfire.error("Database transaction failed", error=str(e))
            raise PersistenceError(f"Database transaction failed: {e}") from e

    async def commit(self) -> None:
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            logfire.error("Database commit failed", error=str(e))
            raise PersistenceError(f"Database commit failed: {e}") from e
