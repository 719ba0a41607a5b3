"""
In-memory card repository.

Implements CardRepository with a process-local dict. Nothing survives the
process; real storage backends live outside this package.
"""

import logging

from hanzi_srs.domain.models import Card, ReviewLog
from hanzi_srs.domain.ports import CardRepository

logger = logging.getLogger(__name__)


class InMemoryCardRepository(CardRepository):
    """Dict-backed store. Iteration follows first-insertion order."""

    def __init__(self, cards: list[Card] | None = None):
        self._cards: dict[str, Card] = {}
        self._logs: list[ReviewLog] = []
        for card in cards or []:
            self._cards[card.id] = card

    async def get(self, card_id: str) -> Card | None:
        return self._cards.get(card_id)

    async def all(self) -> list[Card]:
        return list(self._cards.values())

    async def save(self, card: Card) -> None:
        self._cards[card.id] = card

    async def append_log(self, log: ReviewLog) -> None:
        self._logs.append(log)

    async def logs(self, card_id: str | None = None) -> list[ReviewLog]:
        if card_id is None:
            return list(self._logs)
        return [log for log in self._logs if log.card_id == card_id]
