"""FSRS spaced-repetition scheduling for Chinese vocabulary."""

from hanzi_srs.application.deck_service import DeckService
from hanzi_srs.application.scheduler import FsrsScheduler
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

__version__ = "0.1.0"

__all__ = [
    "FsrsScheduler",
    "DeckService",
    "Card",
    "CardState",
    "CountSummary",
    "Parameters",
    "DEFAULT_PARAMETERS",
    "Rating",
    "ReviewLog",
    "ScheduleResult",
]
