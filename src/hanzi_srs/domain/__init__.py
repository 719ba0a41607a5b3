# Domain Package
from .errors import CardNotFoundError, HanziSrsError, InvalidParametersError
from .models import (
    DEFAULT_PARAMETERS,
    Card,
    CardState,
    CountSummary,
    Parameters,
    Rating,
    ReviewLog,
    ScheduleResult,
)
from .ports import CardRepository

__all__ = [
    "Card",
    "CardState",
    "CountSummary",
    "Parameters",
    "DEFAULT_PARAMETERS",
    "Rating",
    "ReviewLog",
    "ScheduleResult",
    "CardRepository",
    "HanziSrsError",
    "InvalidParametersError",
    "CardNotFoundError",
]
