"""In-memory transaction boundary for testing."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Protocol

from lunabeam.domain.repository.transaction import TransactionManager


class Snapshotting(Protocol):
    def snapshot(self) -> Any: ...

    def restore(self, snapshot: Any) -> None: ...


class InMemoryTransactionManager(TransactionManager):
    """Restores the repositories' previous contents if the block raises."""

    def __init__(self, *repositories: Snapshotting) -> None:
        self._repositories = repositories
        self.commits = 0

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[None]:
        snapshots = [repository.snapshot() for repository in self._repositories]
        try:
            yield
        except BaseException:
            for repository, snapshot in zip(self._repositories, snapshots):
                repository.restore(snapshot)
            raise

    async def commit(self) -> None:
        self.commits += 1
