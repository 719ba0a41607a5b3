# Infrastructure Repositories Package
from .memory import InMemoryCardRepository

__all__ = ["InMemoryCardRepository"]
