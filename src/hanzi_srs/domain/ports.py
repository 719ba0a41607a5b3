"""
Ports (interfaces) for card storage.

These define the contract that infrastructure adapters must implement.
The deck service depends on this abstraction, not on a concrete store.
"""

from abc import ABC, abstractmethod

from .models import Card, ReviewLog


class CardRepository(ABC):
    """
    Port for loading and saving cards and their review history.

    Implementations:
        - InMemoryCardRepository: Process-local dict, used by tests and the CLI.
    """

    @abstractmethod
    async def get(self, card_id: str) -> Card | None:
        """
        Fetch a single card.

        Returns:
            The stored card, or None if the id is unknown.
        """
        pass

    @abstractmethod
    async def all(self) -> list[Card]:
        """Fetch every card, in insertion order."""
        pass

    @abstractmethod
    async def save(self, card: Card) -> None:
        """Insert or replace a card keyed by its id."""
        pass

    @abstractmethod
    async def append_log(self, log: ReviewLog) -> None:
        """Append a review record."""
        pass

    @abstractmethod
    async def logs(self, card_id: str | None = None) -> list[ReviewLog]:
        """
        Fetch review records in the order they were appended.

        Args:
            card_id: Restrict to one card when given.
        """
        pass
