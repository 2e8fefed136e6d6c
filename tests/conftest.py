"""
Pytest configuration and fixtures for HistoryLens tests.
"""

import os

import pytest

import historylens.config as config
from historylens.core.search import reset_searcher
from historylens.models.schema import HistoryRecord

DAY_MS = 24 * 60 * 60 * 1000.0

# Fixed reference time: tests never read the wall clock
NOW = 1_700_000_000_000.0


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Isolate every test from HISTORYLENS_* variables in the environment."""
    for name in list(os.environ):
        if name.upper().startswith("HISTORYLENS_"):
            monkeypatch.delenv(name, raising=False)
    config._settings = None
    reset_searcher()
    yield
    config._settings = None
    reset_searcher()


@pytest.fixture
def make_record():
    """Factory for records visited ``days_ago`` days before NOW."""

    def _make(url="https://example.com", title="Example", visit_count=1, days_ago=0.0, last_visit_time=None):
        if last_visit_time is None:
            last_visit_time = NOW - days_ago * DAY_MS
        return HistoryRecord(
            url=url,
            title=title,
            visit_count=visit_count,
            last_visit_time=last_visit_time,
        )

    return _make


@pytest.fixture
def sample_history(make_record):
    """A small, realistic browsing history."""
    return [
        make_record("https://www.rust-lang.org/learn", "Learn Rust - Rust Programming Language", 12, 0.5),
        make_record("https://doc.rust-lang.org/book/", "The Rust Programming Language", 30, 3),
        make_record("https://docs.python.org/3/tutorial/", "The Python Tutorial", 45, 10),
        make_record("https://news.ycombinator.com/", "Hacker News", 120, 0.1),
        make_record("https://github.com/rust-lang/rust", "GitHub - rust-lang/rust", 8, 40),
        make_record("https://en.wikipedia.org/wiki/Cooking", "Cooking - Wikipedia", 2, 90),
    ]


@pytest.fixture
def history_payload():
    """Raw JSON-like payload in browser history API shape."""
    return [
        {
            "id": "1",
            "url": "https://www.rust-lang.org/",
            "title": "Rust Programming Language",
            "visitCount": 5,
            "typedCount": 1,
            "lastVisitTime": NOW - 2 * DAY_MS,
        },
        {
            "url": "https://docs.python.org/3/",
            "title": "Python docs",
            "visit_count": 3,
            "last_visit_time": NOW - 20 * DAY_MS,
        },
    ]
