"""
FSRS scheduling engine.

Pure computation: takes a card, a rating and a timestamp and returns a new
card plus a review log. No I/O, no shared mutable state. Swap parameter sets
by constructing another FsrsScheduler.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from hanzi_srs.domain.constants import (
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    RELEARN_STEP_MINUTES,
    SECONDS_PER_DAY,
    STABILITY_EPSILON,
)
from hanzi_srs.domain.models import (
    DEFAULT_PARAMETERS,
    Card,
    CardState,
    CountSummary,
    Parameters,
    Rating,
    ReviewLog,
    ScheduleResult,
)

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _round_half_up(value: float) -> int:
    # Builtin round() is banker's rounding; intervals round .5 upwards.
    return math.floor(value + 0.5)


def _clamp_difficulty(value: float) -> float:
    return min(max(value, MIN_DIFFICULTY), MAX_DIFFICULTY)


class FsrsScheduler:
    """
    FSRS v4 scheduler bound to one immutable Parameters bundle.

    Stateless between calls and safe to share; callers serialise reviews
    of the same card.
    """

    def __init__(self, parameters: Parameters = DEFAULT_PARAMETERS):
        self._params = parameters

    @property
    def parameters(self) -> Parameters:
        return self._params

    # ------------------------------------------------------------------
    # Review
    # ------------------------------------------------------------------

    def schedule(
        self, card: Card, rating: Rating, now: datetime | None = None
    ) -> ScheduleResult:
        """
        Apply one review to a card.

        Args:
            card: Card as it was before the review. Not modified.
            rating: Learner's recall quality.
            now: Review time; defaults to the wall clock.

        Returns:
            ScheduleResult with the updated card and a log of the review.
        """
        now = ensure_utc(now) if now is not None else utc_now()
        rating = Rating.parse(rating)

        elapsed_days = self._elapsed_days(card, now)
        if elapsed_days < 0:
            logger.warning(
                f"Card '{card.id}' reviewed at {now.isoformat()} before its last review; "
                f"elapsed_days={elapsed_days:.3f}"
            )

        lapses = card.lapses
        if card.state == CardState.NEW:
            difficulty = self.init_difficulty(rating)
            stability = self.init_stability(rating)
            state = CardState.LEARNING if rating == Rating.AGAIN else CardState.REVIEW
            lapses = 1 if rating == Rating.AGAIN else 0
        else:
            difficulty = self.next_difficulty(card.difficulty, rating)
            stability = self.next_stability(card.stability, difficulty, rating)
            state = self._next_state(card.state, rating)
            if card.state == CardState.REVIEW and rating == Rating.AGAIN:
                lapses += 1

        interval = self.next_interval(stability)
        if rating == Rating.AGAIN:
            due = now + timedelta(minutes=RELEARN_STEP_MINUTES)
        else:
            due = now + timedelta(days=max(1, _round_half_up(interval)))

        updated = replace(
            card,
            state=state,
            stability=stability,
            difficulty=difficulty,
            elapsed_days=elapsed_days,
            scheduled_days=interval,
            reps=card.reps + 1,
            lapses=lapses,
            last_review=now,
            due=due,
        )
        log = ReviewLog(
            card_id=card.id,
            rating=rating,
            state=card.state,
            due=card.due,
            review=now,
            elapsed_days=elapsed_days,
            scheduled_days=card.scheduled_days,
        )

        logger.debug(
            f"Scheduled '{card.id}' {card.state.value}->{state.value} on {rating.label}: "
            f"S={stability:.4f} D={difficulty:.4f} interval={interval}d"
        )
        return ScheduleResult(card=updated, log=log)

    def preview(self, card: Card, now: datetime | None = None) -> dict[Rating, ScheduleResult]:
        """Outcome of every possible rating for the same card and time."""
        now = ensure_utc(now) if now is not None else utc_now()
        return {rating: self.schedule(card, rating, now) for rating in Rating}

    # ------------------------------------------------------------------
    # Collection queries
    # ------------------------------------------------------------------

    def due_cards(self, cards: Iterable[Card], now: datetime | None = None) -> list[Card]:
        """
        Cards that are due or new, earliest due first.

        Ties keep their input order.
        """
        now = ensure_utc(now) if now is not None else utc_now()
        eligible = [
            card
            for card in cards
            if card.state == CardState.NEW or ensure_utc(card.due) <= now
        ]
        return sorted(eligible, key=lambda card: ensure_utc(card.due))

    def counts(self, cards: Iterable[Card], now: datetime | None = None) -> CountSummary:
        """Count cards per state plus those due by now (any state)."""
        now = ensure_utc(now) if now is not None else utc_now()
        new = learning = review = due = 0
        for card in cards:
            if card.state == CardState.NEW:
                new += 1
            elif card.state in (CardState.LEARNING, CardState.RELEARNING):
                learning += 1
            elif card.state == CardState.REVIEW:
                review += 1
            if ensure_utc(card.due) <= now:
                due += 1
        return CountSummary(new=new, learning=learning, review=review, due=due)

    def retrievability(self, card: Card, now: datetime | None = None) -> float | None:
        """
        Modelled probability of recall right now.

        R = (1 + t / (9 * S))^-1, the curve next_interval inverts.
        """
        if card.last_review is None or card.stability <= 0:
            return None
        now = ensure_utc(now) if now is not None else utc_now()
        elapsed = max(self._elapsed_days(card, now), 0.0)
        return 1.0 / (1.0 + elapsed / (9.0 * card.stability))

    # ------------------------------------------------------------------
    # Formulas
    # ------------------------------------------------------------------

    def init_difficulty(self, rating: Rating) -> float:
        w = self._params.w
        return _clamp_difficulty(w[4] - math.exp(w[5] * int(rating)) + 1)

    def init_stability(self, rating: Rating) -> float:
        # 0-based lookup: w[0] for Again .. w[3] for Easy
        return self._params.w[int(rating) - 1]

    def next_difficulty(self, difficulty: float, rating: Rating) -> float:
        w = self._params.w
        d = difficulty - w[6] * (int(rating) - 3)
        d = w[5] * (w[4] - d) + d  # mean reversion
        return _clamp_difficulty(d)

    def next_stability(self, stability: float, difficulty: float, rating: Rating) -> float:
        w = self._params.w
        retention = self._params.request_retention
        s = max(stability, STABILITY_EPSILON)

        if rating == Rating.AGAIN:
            return (
                w[11]
                * math.pow(difficulty, -w[12])
                * (math.pow(s + 1, w[13]) - 1)
                * math.exp(w[14] * (1 - retention))
            )

        recalled = s * (
            1
            + math.exp(w[8])
            * (11 - difficulty)
            * math.pow(s, -w[9])
            * (math.exp(w[10] * (1 - retention)) - 1)
        )
        if rating == Rating.HARD:
            recalled *= w[15]
        elif rating == Rating.EASY:
            recalled *= w[16]
        return recalled

    def next_interval(self, stability: float) -> int:
        """Days until recall probability falls to request_retention, clamped."""
        retention = self._params.request_retention
        maximum = self._params.maximum_interval
        raw = stability * 9 * (1 / retention - 1)
        # Cap before rounding: an overflowed stability must not reach int conversion
        if not math.isfinite(raw) or raw >= maximum:
            return maximum
        return min(max(1, _round_half_up(raw)), maximum)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _elapsed_days(card: Card, now: datetime) -> float:
        if card.last_review is None:
            return 0.0
        return (now - ensure_utc(card.last_review)).total_seconds() / SECONDS_PER_DAY

    @staticmethod
    def _next_state(state: CardState, rating: Rating) -> CardState:
        if state in (CardState.LEARNING, CardState.RELEARNING):
            return CardState.REVIEW if rating in (Rating.GOOD, Rating.EASY) else state
        if state == CardState.REVIEW and rating == Rating.AGAIN:
            return CardState.RELEARNING
        return CardState.REVIEW
