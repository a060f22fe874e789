"""Shared test fixtures for gedcom_dates tests."""

import random
from pathlib import Path

import pytest


FIXTURES_DIR = Path(__file__).parent / "fixtures"
SAMPLE_GEDCOM_PATH = FIXTURES_DIR / "sample_family.ged"


@pytest.fixture
def rng():
    """Seeded random source so randomized tests are reproducible."""
    return random.Random(42)


@pytest.fixture
def sample_gedcom_path():
    assert SAMPLE_GEDCOM_PATH.exists(), f"Test fixture not found: {SAMPLE_GEDCOM_PATH}"
    return SAMPLE_GEDCOM_PATH
