"""
Shared test fixtures for the social-onboarding test suite.

Provides sample people, a seeded in-memory repository, a seed file on disk
and a mock outcome sink (the RegistrationLogger port).
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog

from social_onboarding.adapters.repository import InMemoryPersonRepository
from social_onboarding.domain.models import Person

RICK = Person(id=10, name="Rick Sanchez", email="rick.sanchez@crazy.com", password="wubba-lubba")
MORTY = Person(id=11, name="Morty Smith", email=None, password="aw-jeez")


@pytest.fixture()
def repository() -> InMemoryPersonRepository:
    """In-memory repository holding Rick (id 10) and Morty (id 11, no email)."""
    return InMemoryPersonRepository([RICK, MORTY])


@pytest.fixture()
def outcome_logger() -> MagicMock:
    """Mock RegistrationLogger; assert on log_success / log_failure calls."""
    return MagicMock(spec=["log_success", "log_failure"])


@pytest.fixture()
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "people.json"
    path.write_text(
        json.dumps(
            [
                {"id": RICK.id, "name": RICK.name, "email": RICK.email, "password": RICK.password},
                {"id": MORTY.id, "name": MORTY.name, "password": MORTY.password},
            ]
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo configure_structlog() calls made by a test."""
    yield
    structlog.reset_defaults()
