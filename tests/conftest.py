"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import random
from collections.abc import Iterator

import pytest


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt application for timer-driven tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness so synthesized boards are reproducible."""
    return random.Random(20240611)
