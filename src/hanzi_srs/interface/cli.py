"""hanzi-srs CLI — simulate and preview FSRS schedules, inspect configuration."""

import asyncio
import json
import logging
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Annotated

import typer

from hanzi_srs.application.scheduler import ensure_utc, utc_now
from hanzi_srs.domain.models import Card, CardState, Rating, ScheduleResult
from hanzi_srs.infrastructure.parameters_file import dump_parameters
from hanzi_srs.interface._common import (
    _build_deck_service,
    _build_scheduler,
    _parse_ratings,
    _resolve_with_overrides,
)

# ---------------------------------------------------------------------------
# Root app
# ---------------------------------------------------------------------------

app = typer.Typer(
    help="hanzi-srs: FSRS spaced-repetition scheduler for Chinese vocabulary.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s:%(name)s:%(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

config_app = typer.Typer(help="Manage hanzi-srs configuration.")
app.add_typer(config_app, name="config")

DATETIME_FORMATS = ["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S"]

RetentionOption = Annotated[
    float | None, typer.Option("--retention", help="Target recall probability (0-1).")
]
MaxIntervalOption = Annotated[
    int | None, typer.Option("--max-interval", help="Cap on scheduled days.")
]
ParamsFileOption = Annotated[
    Path | None, typer.Option("--params", help="YAML file with FSRS parameters.")
]


# ---------------------------------------------------------------------------
# Global callback
# ---------------------------------------------------------------------------


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose", "-v", count=True, help="Increase verbosity. Repeat for more detail."
        ),
    ] = 0,
):
    """Global settings for hanzi-srs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose >= 2:
        logging.getLogger().setLevel(logging.DEBUG)
    elif verbose == 1:
        logging.getLogger().setLevel(logging.INFO)


def _apply_log_level(ctx: typer.Context, level: str) -> None:
    # -v flags win over the configured level
    if not ctx.obj or not ctx.obj.get("verbose"):
        logging.getLogger().setLevel(level)


def _row(index: int, result: ScheduleResult) -> dict:
    card = result.card
    return {
        "review": index,
        "date": result.log.review.isoformat(),
        "rating": result.log.rating.label,
        "state": card.state.value,
        "difficulty": round(card.difficulty, 4),
        "stability": round(card.stability, 4),
        "elapsed_days": round(card.elapsed_days, 4),
        "scheduled_days": card.scheduled_days,
        "due": card.due.isoformat(),
    }


def _print_rows(rows: list[dict]) -> None:
    typer.echo(
        f"{'#':>3}  {'rating':<6}  {'state':<10}  {'D':>6}  {'S':>10}  {'days':>6}  due"
    )
    for row in rows:
        typer.echo(
            f"{row['review']:>3}  {row['rating']:<6}  {row['state']:<10}  "
            f"{row['difficulty']:>6.2f}  {row['stability']:>10.2f}  "
            f"{row['scheduled_days']:>6}  {row['due']}"
        )


# ---------------------------------------------------------------------------
# Root commands
# ---------------------------------------------------------------------------


@app.command()
def simulate(
    ctx: typer.Context,
    ratings: Annotated[
        list[str], typer.Argument(help="Ratings to replay in order: again, hard, good, easy or 1-4.")
    ],
    every: Annotated[
        float | None,
        typer.Option(
            "--every", help="Days between reviews. Defaults to reviewing exactly when due."
        ),
    ] = None,
    start: Annotated[
        datetime | None, typer.Option(formats=DATETIME_FORMATS, help="Time of the first review.")
    ] = None,
    card_id: Annotated[str, typer.Option("--card", help="Item being studied.")] = "学",
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON instead of a table.")] = False,
    retention: RetentionOption = None,
    max_interval: MaxIntervalOption = None,
    params: ParamsFileOption = None,
):
    """[bold green]Simulate[/bold green] a sequence of reviews on a fresh card."""
    parsed = _parse_ratings(ratings)
    config = _resolve_with_overrides(
        request_retention=retention,
        maximum_interval=max_interval,
        parameters_file=params,
    )
    _apply_log_level(ctx, config.log_level)
    deck = _build_deck_service(config)
    first = ensure_utc(start) if start else utc_now()

    async def run() -> list[dict]:
        await deck.add_card(card_id, first)
        now = first
        rows = []
        for index, rating in enumerate(parsed, start=1):
            result = await deck.review_card(card_id, rating, now)
            rows.append(_row(index, result))
            now = now + timedelta(days=every) if every is not None else result.card.due
        return rows

    rows = asyncio.run(run())

    if as_json:
        typer.echo(json.dumps(rows, indent=2, ensure_ascii=False))
    else:
        _print_rows(rows)


@app.command()
def preview(
    ctx: typer.Context,
    state: Annotated[
        CardState, typer.Option(case_sensitive=False, help="Current card state.")
    ] = CardState.NEW,
    stability: Annotated[float, typer.Option(help="Current stability in days.")] = 0.0,
    difficulty: Annotated[float, typer.Option(help="Current difficulty (1-10).")] = 0.0,
    elapsed_days: Annotated[
        float, typer.Option(help="Days since the last review (ignored for new cards).")
    ] = 0.0,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON instead of a table.")] = False,
    retention: RetentionOption = None,
    max_interval: MaxIntervalOption = None,
    params: ParamsFileOption = None,
):
    """Show what each rating would do to a card."""
    config = _resolve_with_overrides(
        request_retention=retention,
        maximum_interval=max_interval,
        parameters_file=params,
    )
    _apply_log_level(ctx, config.log_level)
    scheduler = _build_scheduler(config)

    now = utc_now()
    if state == CardState.NEW:
        card = Card.new("preview", now)
    else:
        card = Card(
            id="preview",
            due=now,
            state=state,
            stability=stability,
            difficulty=difficulty,
            reps=1,
            last_review=now - timedelta(days=elapsed_days),
        )

    outcomes = scheduler.preview(card, now)
    rows = [_row(int(rating), outcomes[rating]) for rating in Rating]

    if as_json:
        typer.echo(json.dumps(rows, indent=2))
    else:
        _print_rows(rows)


# ---------------------------------------------------------------------------
# Config subgroup
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show():
    """Display final resolved configuration."""
    config = _resolve_with_overrides()
    d = {k: str(v) if isinstance(v, Path) else v for k, v in config.model_dump().items()}
    typer.echo(json.dumps(d, indent=2))


@config_app.command("params")
def config_params(
    params: ParamsFileOption = None,
):
    """Print the resolved FSRS parameters as YAML (loadable with --params)."""
    config = _resolve_with_overrides(parameters_file=params)
    scheduler = _build_scheduler(config)
    typer.echo(dump_parameters(scheduler.parameters), nl=False)


def main():
    app()


if __name__ == "__main__":
    main()
