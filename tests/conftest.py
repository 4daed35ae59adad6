import pytest

from die_agony.solver import Solver


@pytest.fixture(scope="session")
def solution():
    """The canonical board solved once for the whole test session."""
    return Solver().solve()
