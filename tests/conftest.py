"""Shared test fixtures for howdy."""

import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

PLUS_TWO = timezone(timedelta(hours=2))


@pytest.fixture
def now():
    """Fixed report instant: Wednesday 2024-01-10 12:00 at +02:00."""
    return datetime(2024, 1, 10, 12, 0, 0, tzinfo=PLUS_TWO)


@pytest.fixture
def make_score():
    """Factory for DailyScore entries relative to a given instant."""
    from journal.record import DailyScore

    def _make(score, timestamp, tags=(), comment=None):
        return DailyScore(score=score, timestamp=timestamp, tags=frozenset(tags), comment=comment)

    return _make


@pytest.fixture
def journal_file(tmp_path):
    """Path of a not yet created journal file."""
    return tmp_path / "journal" / "howdy.journal"


@pytest.fixture
def sample_lines():
    """Journal lines around the `now` fixture."""
    return [
        "2023-12-01 10:00:00 +0200 | 4 | ",
        "2024-01-10 09:00:00 +0200 | 2 | work",
        "2024-01-10 10:00:00 +0200 | 1 | health,work | foo || bar",
    ]


@pytest.fixture
def populated_journal(journal_file, sample_lines):
    """Journal file holding sample_lines."""
    journal_file.parent.mkdir(parents=True, exist_ok=True)
    journal_file.write_text("\n".join(sample_lines) + "\n", encoding="utf-8")
    return journal_file
