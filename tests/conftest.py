# tests/conftest.py
import os
import tempfile
from datetime import datetime, timezone
import importlib
import pytest
from fastapi.testclient import TestClient

from speakmate.db import DatabaseManager
from speakmate.repositories import ResultRepository
from speakmate.schemas import TranscriptionPayload, TranscriptWord
from speakmate.services.results_service import ResultsService


@pytest.fixture()
def fixed_now():
    # 2025-10-20 15:30:00 UTC (a Monday)
    return datetime(2025, 10, 20, 15, 30, 0, tzinfo=timezone.utc)


class Clock:
    """Mutable clock so a test can move 'now' between calls."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture()
def clock(fixed_now):
    return Clock(fixed_now)


@pytest.fixture()
def tmp_db_path():
    tmp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
    tmp_db.close()
    yield tmp_db.name
    os.unlink(tmp_db.name)


@pytest.fixture()
def results_service(tmp_db_path, clock):
    db = DatabaseManager(tmp_db_path)
    db.initialize()
    return ResultsService(ResultRepository(db, max_results=50), clock, retention_months=6)


@pytest.fixture()
def app_client(monkeypatch, fixed_now, tmp_db_path):
    import api
    importlib.reload(api)

    # Temporary database
    monkeypatch.setattr(api, "DB", tmp_db_path, raising=True)

    # Freeze the clock
    monkeypatch.setattr(api, "utc_now", lambda: fixed_now, raising=True)

    api.init_db()
    with TestClient(api.app) as client:
        yield client


def make_words(*specs):
    """Build transcript words from (text, start, end, confidence) tuples."""
    return [TranscriptWord(text=t, start_sec=s, end_sec=e, confidence=c) for t, s, e, c in specs]


def evenly_spaced_words(count, span, confidence=0.9):
    """``count`` back-to-back words covering ``span`` seconds with no pauses."""
    step = span / count
    return [
        TranscriptWord(text=f"word{i}", start_sec=i * step, end_sec=(i + 1) * step, confidence=confidence)
        for i in range(count)
    ]


@pytest.fixture()
def tired_afternoon_payload():
    return TranscriptionPayload(
        transcript="I think I'm very tired this afternoon",
        utterance_confidence=0.9,
        words=make_words(
            ("I", 0.0, 0.2, 0.95),
            ("think", 0.2, 0.5, 0.90),
            ("I'm", 0.5, 0.8, 0.92),
            ("very", 0.8, 1.1, 0.88),
            ("tired", 1.1, 1.5, 0.91),
            ("this", 1.5, 1.8, 0.93),
            ("afternoon", 1.8, 2.4, 0.89),
        ),
        total_duration_sec=5.0,
    )
