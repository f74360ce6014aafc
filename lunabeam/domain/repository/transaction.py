"""Transaction boundary interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    """All-or-nothing boundary spanning several repositories.

    Writes made through the request's repositories inside ``begin()`` are
    discarded together if the block raises.
    """

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction block.

        Raises:
            PersistenceError: If the store fails while the block runs
        """
        pass

    @abstractmethod
    async def commit(self) -> None:
        """Make everything written so far durable.

        Used before side effects that must only happen for stored data.

        Raises:
            PersistenceError: If the store refuses the commit
        """
        pass
