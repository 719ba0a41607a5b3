"""Exceptions raised at the boundaries of the scheduler.

The scheduling engine itself is total over valid input; these cover
configuration loading and the deck service.
"""


class HanziSrsError(Exception):
    """Base class for all hanzi-srs errors."""


class InvalidParametersError(HanziSrsError, ValueError):
    """Raised when a parameter bundle or parameter file is malformed."""


class CardNotFoundError(HanziSrsError, KeyError):
    """Raised when a review targets a card the deck does not contain."""

    def __init__(self, card_id: str):
        super().__init__(card_id)
        self.card_id = card_id

    def __str__(self) -> str:
        return f"No card with id '{self.card_id}'"
