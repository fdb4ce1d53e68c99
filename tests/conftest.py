"""
Pytest configuration and shared fixtures for the model filter.

This module provides:
- In-memory and temporary SQLite state stores
- A filter engine configured with the ticket rule set
- A recording query accumulator

Example usage in tests:
    def test_something(ticket_engine, recording_query):
        ticket_engine.set_form_data({"subject": "Print"})
        ticket_engine.filter(recording_query)
        assert recording_query.calls == [("where_like", "subject", "Print%")]
"""

from __future__ import annotations

import tempfile
from collections.abc import Iterator
from pathlib import Path

import pytest

from model_filter.engine import FilterEngine
from model_filter.state import MemoryStore, SQLiteSessionStore

from tests.fixtures import TICKET_RULES, RecordingQuery


# ============================================================================
# STATE STORE FIXTURES
# ============================================================================


@pytest.fixture
def memory_store() -> MemoryStore:
    """Provide an empty in-memory session store."""
    return MemoryStore()


@pytest.fixture
def temp_db_path() -> Iterator[Path]:
    """Provide a path for a SQLite session database in a temp directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir) / "sessions.db"


@pytest.fixture
def sqlite_store(temp_db_path: Path) -> Iterator[SQLiteSessionStore]:
    """Provide a SQLite session store for session "alice".

    Yields:
        SQLiteSessionStore, closed after the test
    """
    store = SQLiteSessionStore(temp_db_path, session_id="alice")
    yield store
    store.close()


# ============================================================================
# ENGINE FIXTURES
# ============================================================================


@pytest.fixture
def ticket_engine(memory_store: MemoryStore) -> FilterEngine:
    """Provide an engine for the "tickets" key with the ticket rule set."""
    engine = FilterEngine(memory_store, "tickets")
    engine.set_rules(TICKET_RULES)
    return engine


@pytest.fixture
def recording_query() -> RecordingQuery:
    """Provide a fresh recording accumulator."""
    return RecordingQuery()


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "integration: mark as integration test")
