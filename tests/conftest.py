import pytest

from pathviz.core.grid import build_grid, from_walls


@pytest.fixture
def open5():
    return build_grid(5)


@pytest.fixture
def ring5():
    """5x5 grid with the center cell walled in on all sides."""
    ring = [(1, 1), (1, 2), (1, 3), (2, 1), (2, 3), (3, 1), (3, 2), (3, 3)]
    return from_walls(5, ring)
