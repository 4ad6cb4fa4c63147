"""Root pytest configuration for all tests.

Provides the scenario instances shared by the domain and infrastructure
tests. Instance files on disk live in tests/fixtures/ (see
shared/fixtures_expected.py).
"""

from pathlib import Path

import numpy as np
import pytest

from domain.coverage.value_objects import ProblemInstance
from tests.conftest_utils import build_instance, get_fixtures_dir


@pytest.fixture
def fixtures_dir() -> Path:
    return get_fixtures_dir()


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator so randomized tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def example_instance() -> ProblemInstance:
    """Worked example: two receivers covered initially, one needs transmitter 4."""
    return build_instance(
        (10, 10),
        [(1, 2, 5, 1), (2, 0, 6, 3), (3, 1, 2, 2), (4, 3, 5, 3)],
        [(1, 0, 1), (2, 8, 8), (3, 6, 5)],
    )


@pytest.fixture
def multiple_increases_instance() -> ProblemInstance:
    """Two transmitters must be raised, in two greedy steps."""
    return build_instance(
        (10, 10),
        [(1, 1, 4, 1), (2, 3, 4, 1), (3, 6, 3, 1)],
        [(1, 2, 2), (2, 4, 2), (3, 9, 0)],
    )
