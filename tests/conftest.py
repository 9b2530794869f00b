"""Pytest configuration and fixtures for lifeboard tests."""

import numpy as np
import pytest

from lifeboard.core.board import Board
from lifeboard.core.coordinate import EdgePolicy
from lifeboard.core.sparse_board import SparseBoard


@pytest.fixture
def rng() -> np.random.Generator:
    """Deterministic randomness source."""
    return np.random.default_rng(1234)


@pytest.fixture
def regression_board() -> Board:
    """The 3x3 regression board on clipped edges."""
    return Board.from_cells([False, True, True, False, True, False, False, False, False], EdgePolicy.CLIPPED)


@pytest.fixture(params=[Board, SparseBoard], ids=["dense", "sparse"])
def board_cls(request):
    """Each board implementation in turn."""
    return request.param


@pytest.fixture(params=list(EdgePolicy), ids=lambda p: p.value)
def policy(request) -> EdgePolicy:
    """Each edge policy in turn."""
    return request.param
