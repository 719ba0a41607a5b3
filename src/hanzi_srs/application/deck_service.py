"""
Deck Service — Application layer orchestrator.

Coordinates loading cards from the repository, scheduling reviews with the
engine and writing the results back.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime

from hanzi_srs.domain.constants import DEFAULT_DAILY_NEW_LIMIT, DEFAULT_DAILY_REVIEW_LIMIT
from hanzi_srs.domain.errors import CardNotFoundError
from hanzi_srs.domain.models import Card, CardState, CountSummary, Rating, ReviewLog, ScheduleResult
from hanzi_srs.domain.ports import CardRepository

from .scheduler import FsrsScheduler, ensure_utc, utc_now

logger = logging.getLogger(__name__)


class DeckService:
    """
    Application service for one learner's card collection.

    Follows Dependency Inversion: depends on the CardRepository abstraction,
    not on a concrete store.
    """

    def __init__(
        self,
        repository: CardRepository,
        scheduler: FsrsScheduler | None = None,
        daily_new_limit: int = DEFAULT_DAILY_NEW_LIMIT,
        daily_review_limit: int = DEFAULT_DAILY_REVIEW_LIMIT,
    ):
        """
        Args:
            repository: The repository (port) holding cards and logs.
            scheduler: Optional custom engine; uses default parameters if not provided.
            daily_new_limit: Most new cards study_queue hands out.
            daily_review_limit: Most learning/review cards study_queue hands out.
        """
        self._repo = repository
        self._scheduler = scheduler or FsrsScheduler()
        self.daily_new_limit = max(daily_new_limit, 0)
        self.daily_review_limit = max(daily_review_limit, 0)
        self._locks: defaultdict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    @property
    def scheduler(self) -> FsrsScheduler:
        return self._scheduler

    async def add_card(self, card_id: str, now: datetime | None = None) -> Card:
        """
        Start studying an item. Adding a known id returns the stored card unchanged.
        """
        async with self._locks[card_id]:
            existing = await self._repo.get(card_id)
            if existing is not None:
                return existing

            card = Card.new(card_id, ensure_utc(now) if now else utc_now())
            await self._repo.save(card)
            logger.info(f"Added card '{card_id}'")
            return card

    async def get_card(self, card_id: str) -> Card | None:
        return await self._repo.get(card_id)

    async def review_card(
        self, card_id: str, rating: Rating, now: datetime | None = None
    ) -> ScheduleResult:
        """
        Schedule a review and persist the updated card and its log.

        Reviews of the same card are serialised so each one sees the result
        of the previous.

        Raises:
            CardNotFoundError: If the card was never added.
        """
        async with self._locks[card_id]:
            card = await self._repo.get(card_id)
            if card is None:
                # Unknown ids must not leave a lock behind
                self._locks.pop(card_id, None)
                raise CardNotFoundError(card_id)

            result = self._scheduler.schedule(card, rating, now)
            await self._repo.save(result.card)
            await self._repo.append_log(result.log)

        logger.info(
            f"Reviewed '{card_id}' as {result.log.rating.label}: "
            f"{result.log.state.value} -> {result.card.state.value}, "
            f"next due {result.card.due.isoformat()}"
        )
        return result

    async def due_cards(self, now: datetime | None = None) -> list[Card]:
        return self._scheduler.due_cards(await self._repo.all(), now)

    async def counts(self, now: datetime | None = None) -> CountSummary:
        return self._scheduler.counts(await self._repo.all(), now)

    async def study_queue(self, now: datetime | None = None) -> list[Card]:
        """
        Due cards capped by the daily limits, earliest due first.

        New cards count against daily_new_limit; everything else against
        daily_review_limit.
        """
        queue: list[Card] = []
        new_taken = 0
        review_taken = 0

        for card in await self.due_cards(now):
            if card.state == CardState.NEW:
                if new_taken >= self.daily_new_limit:
                    continue
                new_taken += 1
            else:
                if review_taken >= self.daily_review_limit:
                    continue
                review_taken += 1
            queue.append(card)

        logger.debug(f"Study queue: {new_taken} new, {review_taken} review")
        return queue

    async def logs(self, card_id: str | None = None) -> list[ReviewLog]:
        return await self._repo.logs(card_id)
