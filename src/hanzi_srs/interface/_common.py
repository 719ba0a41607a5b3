"""Shared helpers for CLI commands."""

from typing import Any

import typer
from pydantic import ValidationError

from hanzi_srs.application.config import AppConfig, resolve_config
from hanzi_srs.application.deck_service import DeckService
from hanzi_srs.application.factory import get_deck_service, get_scheduler
from hanzi_srs.application.scheduler import FsrsScheduler
from hanzi_srs.domain.errors import InvalidParametersError
from hanzi_srs.domain.models import Rating


def _resolve_with_overrides(**overrides: Any) -> AppConfig:
    """Resolve config with CLI values on top; exits with code 2 on invalid settings."""
    try:
        return resolve_config(overrides)
    except ValidationError as e:
        typer.secho(f"Invalid configuration: {e}", fg="red", err=True)
        raise typer.Exit(2) from e


def _parse_ratings(values: list[str]) -> list[Rating]:
    ratings = []
    for value in values:
        try:
            ratings.append(Rating.parse(value))
        except ValueError as e:
            typer.secho(f"{e}. Use again, hard, good, easy or 1-4.", fg="red", err=True)
            raise typer.Exit(2) from e
    return ratings


def _build_scheduler(config: AppConfig) -> FsrsScheduler:
    try:
        return get_scheduler(config)
    except InvalidParametersError as e:
        typer.secho(f"Invalid parameters: {e}", fg="red", err=True)
        raise typer.Exit(2) from e


def _build_deck_service(config: AppConfig) -> DeckService:
    try:
        return get_deck_service(config)
    except InvalidParametersError as e:
        typer.secho(f"Invalid parameters: {e}", fg="red", err=True)
        raise typer.Exit(2) from e
