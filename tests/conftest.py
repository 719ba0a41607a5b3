from datetime import datetime, timedelta, timezone

import pytest

from hanzi_srs.application.scheduler import FsrsScheduler
from hanzi_srs.domain.models import Card, CardState


@pytest.fixture
def now():
    return datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def scheduler():
    return FsrsScheduler()


@pytest.fixture
def new_card(now):
    return Card.new("学", now)


@pytest.fixture
def review_card(now):
    """A Review-state card with S=5, D=5, last reviewed 10 days ago."""
    return Card(
        id="中",
        due=now - timedelta(days=5),
        state=CardState.REVIEW,
        stability=5.0,
        difficulty=5.0,
        scheduled_days=5,
        reps=3,
        lapses=0,
        last_review=now - timedelta(days=10),
    )


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Isolate config lookups from the real user directory
    monkeypatch.setenv("HOME", str(home))
    for var in (
        "HANZI_SRS_REQUEST_RETENTION",
        "HANZI_SRS_MAXIMUM_INTERVAL",
        "HANZI_SRS_WEIGHTS",
        "HANZI_SRS_PARAMETERS_FILE",
        "HANZI_SRS_DAILY_NEW_LIMIT",
        "HANZI_SRS_DAILY_REVIEW_LIMIT",
        "HANZI_SRS_LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)
    return home
