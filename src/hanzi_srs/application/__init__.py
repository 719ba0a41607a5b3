# Application Package
from .deck_service import DeckService
from .scheduler import FsrsScheduler

__all__ = ["FsrsScheduler", "DeckService"]
