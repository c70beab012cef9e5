"""Test configuration and fixtures for Library Records.

This conftest.py provides:
1. Isolated data directories - Each test gets its own collection files
2. Configuration overrides - Test-specific settings with a clean global config
3. A deterministic clock - Loan and return dates are predictable
4. Prepared managers - Empty and pre-populated libraries
"""

import os
from collections.abc import Generator
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from library_records.config import LibraryConfig, reset_config
from library_records.manager import LibraryManager
from library_records.models import Book, Reader
from library_records.storage import StorageLocations

# === Clock ===


class SteppingClock:
    """Clock that starts at a fixed instant and advances one minute per call."""

    def __init__(self, start: datetime | None = None, step: timedelta = timedelta(minutes=1)):
        self.current = start or datetime(2024, 5, 1, 9, 30, tzinfo=UTC)
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current = self.current + self.step
        return now


@pytest.fixture
def clock() -> SteppingClock:
    return SteppingClock()


# === Storage Fixtures ===


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Provide an empty data directory for each test."""
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def locations(data_dir: Path) -> StorageLocations:
    return StorageLocations.in_directory(data_dir)


# === Configuration Fixtures ===


@pytest.fixture
def test_config(data_dir: Path) -> Generator[LibraryConfig, None, None]:
    """Provide a test-specific configuration pointing at the temp data dir."""
    reset_config()

    config = LibraryConfig(
        data_dir=data_dir,
        debug=True,
        log_level="DEBUG",
    )

    yield config

    reset_config()


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Provide a clean environment without LIBRARY_RECORDS_* variables."""
    original_env = os.environ.copy()

    for key in list(os.environ.keys()):
        if key.startswith("LIBRARY_RECORDS_"):
            del os.environ[key]

    yield

    os.environ.clear()
    os.environ.update(original_env)


# === Manager Fixtures ===


@pytest.fixture
def manager(clock: SteppingClock) -> LibraryManager:
    """Provide an empty library with a deterministic clock."""
    return LibraryManager(clock=clock)


@pytest.fixture
def sample_books() -> list[Book]:
    return [
        Book(title="Dune", author="Frank Herbert", isbn="111"),
        Book(title="The Left Hand of Darkness", author="Ursula K. Le Guin", isbn="222"),
        Book(title="Children of Dune", author="Frank Herbert", isbn="333"),
        Book(title="A Wizard of Earthsea", author="Ursula K. Le Guin", isbn="444"),
    ]


@pytest.fixture
def populated_manager(manager: LibraryManager, sample_books: list[Book]) -> LibraryManager:
    """Provide a library with four books, two readers and some loan history.

    State:
    - reader 1 (Alice) has returned "111" and currently holds "222"
    - reader 2 (Bob) currently holds "333"
    - "111" and "444" are on the shelf
    """
    for book in sample_books:
        assert manager.add_book(book)
    assert manager.add_reader(Reader(id=1, name="Alice", email="alice@example.com"))
    assert manager.add_reader(Reader(id=2, name="Bob", email="bob@example.com"))

    assert manager.issue_loan("111", 1)
    assert manager.return_book("111", 1)
    assert manager.issue_loan("222", 1)
    assert manager.issue_loan("333", 2)
    return manager
