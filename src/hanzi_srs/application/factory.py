"""
Scheduler Factory
Centralizes building the engine and deck service from configuration.
"""

import logging

from hanzi_srs.application.config import AppConfig
from hanzi_srs.application.deck_service import DeckService
from hanzi_srs.application.scheduler import FsrsScheduler
from hanzi_srs.domain.ports import CardRepository
from hanzi_srs.infrastructure.repositories import InMemoryCardRepository

logger = logging.getLogger(__name__)


def get_scheduler(config: AppConfig) -> FsrsScheduler:
    """
    Returns an engine bound to the parameters the config resolves to.
    """
    params = config.to_parameters()
    logger.debug(
        f"FSRS parameters: retention={params.request_retention} "
        f"max_interval={params.maximum_interval}"
    )
    return FsrsScheduler(params)


def get_deck_service(
    config: AppConfig, repository: CardRepository | None = None
) -> DeckService:
    """
    Returns a DeckService over the given repository (in-memory if omitted).
    """
    return DeckService(
        repository or InMemoryCardRepository(),
        scheduler=get_scheduler(config),
        daily_new_limit=config.daily_new_limit,
        daily_review_limit=config.daily_review_limit,
    )
