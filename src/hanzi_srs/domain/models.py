"""
Domain models for FSRS scheduling.

These are pure data structures with no I/O or external dependencies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum, IntEnum

from .constants import (
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_REQUEST_RETENTION,
    DEFAULT_WEIGHTS,
    WEIGHT_COUNT,
)
from .errors import InvalidParametersError


class CardState(str, Enum):
    """Learning phase of a card."""

    NEW = "New"
    LEARNING = "Learning"
    REVIEW = "Review"
    RELEARNING = "Relearning"


class Rating(IntEnum):
    """Recall quality reported by the learner, worst to best."""

    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def parse(cls, value: "str | int | Rating") -> "Rating":
        """
        Accept a Rating, its numeric value (1-4) or its name in any case.

        Raises:
            ValueError: If the value names no rating.
        """
        if isinstance(value, Rating):
            return value
        if isinstance(value, int):
            return cls(value)
        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            raise ValueError(f"Unknown rating: {value!r}") from None


@dataclass(frozen=True)
class Card:
    """
    Per-item learning state.

    Attributes:
        id: Identifier of the studied item (a character or word).
        state: Current learning phase.
        stability: Days until recall probability decays to the target retention.
        difficulty: Intrinsic hardness, 1 (easiest) to 10 (hardest); 0 before the first review.
        elapsed_days: Days between the previous review and the latest one.
        scheduled_days: Interval scheduled by the latest review.
        reps: Number of reviews performed.
        lapses: Number of failed recalls.
        last_review: Timestamp of the latest review, None if never reviewed.
        due: When the card becomes eligible for review.
    """

    id: str
    due: datetime
    state: CardState = CardState.NEW
    stability: float = 0.0
    difficulty: float = 0.0
    elapsed_days: float = 0.0
    scheduled_days: float = 0.0
    reps: int = 0
    lapses: int = 0
    last_review: datetime | None = None

    @classmethod
    def new(cls, card_id: str, now: datetime) -> "Card":
        """Create a never-reviewed card that is due immediately."""
        return cls(id=card_id, due=now)


@dataclass(frozen=True)
class ReviewLog:
    """
    A single review record. State and due are captured before the update.

    Attributes:
        card_id: The card that was reviewed.
        rating: Button pressed.
        state: Card state before this review.
        due: When the card was due before this review.
        review: When the review actually happened.
        elapsed_days: Days since the previous review.
        scheduled_days: Interval that had been scheduled for this review.
    """

    card_id: str
    rating: Rating
    state: CardState
    due: datetime
    review: datetime
    elapsed_days: float
    scheduled_days: float


@dataclass(frozen=True)
class ScheduleResult:
    """Outcome of scheduling one review."""

    card: Card
    log: ReviewLog


@dataclass(frozen=True)
class CountSummary:
    """Aggregate counts over a card collection."""

    new: int = 0
    learning: int = 0  # Learning and Relearning
    review: int = 0
    due: int = 0


@dataclass(frozen=True)
class Parameters:
    """
    Immutable FSRS configuration.

    Attributes:
        request_retention: Target recall probability intervals are optimised for.
        maximum_interval: Hard cap on scheduled days.
        w: The 19 model weights.
    """

    request_retention: float = DEFAULT_REQUEST_RETENTION
    maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL
    w: tuple[float, ...] = field(default=DEFAULT_WEIGHTS)

    def __post_init__(self) -> None:
        try:
            weights = tuple(float(x) for x in self.w)
        except (TypeError, ValueError) as e:
            raise InvalidParametersError(f"Weights must be numbers: {e}") from e
        if len(weights) != WEIGHT_COUNT:
            raise InvalidParametersError(
                f"Expected {WEIGHT_COUNT} weights, got {len(weights)}"
            )
        if not 0.0 < self.request_retention < 1.0:
            raise InvalidParametersError(
                f"request_retention must be in (0, 1), got {self.request_retention}"
            )
        if self.maximum_interval < 1:
            raise InvalidParametersError(
                f"maximum_interval must be at least 1, got {self.maximum_interval}"
            )
        object.__setattr__(self, "w", weights)


DEFAULT_PARAMETERS = Parameters()
