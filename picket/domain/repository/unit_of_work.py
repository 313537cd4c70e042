"""Unit of work interface."""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Commits the writes made by the repositories of one request.

    Anything not committed explicitly is committed when the request ends,
    or rolled back if it fails. Use cases commit explicitly before spawning
    side effects that must only happen once the change is durable.
    """

    @abstractmethod
    async def commit(self) -> None:
        pass
