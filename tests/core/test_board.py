"""Tests for the board implementations."""

import dataclasses
from unittest.mock import patch

import numpy as np
import pytest
import torch

from lifeboard.core.board import Board, Generation, LifeBoard
from lifeboard.core.coordinate import Coordinate, EdgePolicy
from lifeboard.core.errors import InvalidDimension, LifeError, OutOfBounds

REGRESSION_CELLS = [False, True, True, False, True, False, False, False, False]


def make_board(board_cls, size, policy, living):
    board = board_cls(size, policy)
    board.seed_cells(living)
    return board


class TestBoardContract:
    """Behavior shared by Board and SparseBoard."""

    def test_initialization(self, board_cls, policy):
        """Test a new board is empty with the requested size and policy."""
        board = board_cls(5, policy)
        assert board.size == 5
        assert board.policy is policy
        assert board.population == 0
        assert len(board.cells) == 25
        assert not any(board.cells)

    def test_default_policy_is_clipped(self, board_cls):
        """Test boards clip edges unless told otherwise."""
        assert board_cls(3).policy is EdgePolicy.CLIPPED

    def test_satisfies_protocol(self, board_cls):
        """Test both engines expose the shared capability set."""
        assert isinstance(board_cls(3), LifeBoard)

    @pytest.mark.parametrize("size", [0, -1, -10])
    def test_invalid_dimension(self, board_cls, size):
        """Test sizes below 1 are rejected."""
        with pytest.raises(InvalidDimension):
            board_cls(size)

    def test_invalid_dimension_type(self, board_cls):
        """Test non-integer sizes are rejected."""
        with pytest.raises(InvalidDimension):
            board_cls(2.5)

    def test_errors_are_standard_exceptions(self, board_cls):
        """Test engine errors can be caught as built-in exception types."""
        with pytest.raises(ValueError):
            board_cls(0)

        with pytest.raises(IndexError):
            board_cls(3).is_alive(Coordinate(3, 0))

        with pytest.raises(LifeError):
            board_cls(3).is_alive(Coordinate(0, -1))

    def test_seed_cells(self, board_cls):
        """Test exactly the given cells become alive."""
        board = board_cls(4)
        board.seed_cells([Coordinate(1, 2), Coordinate(3, 3)])

        assert board.population == 2
        assert board.is_alive(Coordinate(1, 2))
        assert board.is_alive(Coordinate(3, 3))
        assert not board.is_alive(Coordinate(0, 0))

    def test_seed_cells_replaces_state(self, board_cls):
        """Test seeding again clears previously living cells."""
        board = board_cls(4)
        board.seed_cells([Coordinate(0, 0)])
        board.seed_cells([Coordinate(1, 1)])

        assert not board.is_alive(Coordinate(0, 0))
        assert board.living_cells() == {Coordinate(1, 1)}

    def test_seed_cells_accepts_tuples(self, board_cls):
        """Test (row, col) pairs work in place of coordinates."""
        board = board_cls(4)
        board.seed_cells([(2, 1)])
        assert board.is_alive((2, 1))
        assert board.is_alive(Coordinate(2, 1))

    def test_seed_cells_out_of_bounds(self, board_cls, policy):
        """Test off-board seeds fail and leave the board unchanged."""
        board = board_cls(4, policy)
        board.seed_cells([Coordinate(0, 0)])

        with pytest.raises(OutOfBounds) as excinfo:
            board.seed_cells([Coordinate(1, 1), Coordinate(4, 0)])

        assert excinfo.value.coordinate == Coordinate(4, 0)
        assert excinfo.value.size == 4
        assert board.living_cells() == {Coordinate(0, 0)}

    def test_is_alive_out_of_bounds(self, board_cls, policy):
        """Test reads outside the board fail for both policies."""
        board = board_cls(3, policy)
        for coord in [Coordinate(-1, 0), Coordinate(0, -1), Coordinate(3, 0), Coordinate(0, 3)]:
            with pytest.raises(OutOfBounds):
                board.is_alive(coord)

    def test_living_neighbor_count_out_of_bounds(self, board_cls, policy):
        """Test neighbor counts outside the board fail."""
        with pytest.raises(OutOfBounds):
            board_cls(3, policy).living_neighbor_count(Coordinate(5, 5))

    def test_seed_random_extremes(self, board_cls, rng):
        """Test densities 0 and 1 give empty and full boards."""
        board = board_cls(10)

        board.seed_random(0.0, rng)
        assert board.population == 0

        board.seed_random(1.0, rng)
        assert board.population == 100

    def test_seed_random_intermediate(self, board_cls, rng):
        """Test an intermediate density gives roughly that share of living cells."""
        board = board_cls(20)
        board.seed_random(0.5, rng)
        assert 120 <= board.population <= 280

    @pytest.mark.parametrize("density", [-0.1, 1.5])
    def test_seed_random_invalid_density(self, board_cls, density):
        """Test densities outside [0, 1] are rejected."""
        with pytest.raises(ValueError):
            board_cls(5).seed_random(density, np.random.default_rng(0))

    def test_seed_random_is_reproducible(self, board_cls):
        """Test the same generator state gives the same board."""
        first = board_cls(12)
        second = board_cls(12)
        first.seed_random(0.4, np.random.default_rng(99))
        second.seed_random(0.4, np.random.default_rng(99))
        assert first.living_cells() == second.living_cells()

    def test_seed_random_without_generator(self, board_cls):
        """Test seeding works without an explicit generator."""
        board = board_cls(5)
        board.seed_random(1.0)
        assert board.population == 25

    def test_seed_population(self, board_cls, rng):
        """Test an exact number of distinct living cells."""
        board = board_cls(5)
        board.seed_population(2, rng)
        assert board.population == 2

        board.seed_population(25, rng)
        assert board.population == 25

        board.seed_population(0, rng)
        assert board.population == 0

    @pytest.mark.parametrize("count", [-1, 26])
    def test_seed_population_invalid(self, board_cls, count):
        """Test counts outside [0, N*N] are rejected."""
        with pytest.raises(ValueError):
            board_cls(5).seed_population(count, np.random.default_rng(0))

    def test_neighbor_count_regression_fixture_clipped(self, board_cls):
        """Test per-cell counts of the 3x3 regression board with clipped edges."""
        board = make_board(board_cls, 3, EdgePolicy.CLIPPED, Board.from_cells(REGRESSION_CELLS).living_cells())
        expected = [2, 2, 2, 2, 2, 3, 1, 1, 1]

        for i, count in enumerate(expected):
            assert board.living_neighbor_count(Coordinate.from_index(i, 3)) == count

    def test_neighbor_count_regression_fixture_toroidal(self, board_cls):
        """Test that on a 3x3 torus every cell sees all other living cells."""
        board = make_board(board_cls, 3, EdgePolicy.TOROIDAL, Board.from_cells(REGRESSION_CELLS).living_cells())

        for coord, alive in board:
            assert board.living_neighbor_count(coord) == 3 - int(alive)

    def test_neighbor_count_bounds(self, board_cls, policy, rng):
        """Test counts stay within 0-8 on random boards of many sizes."""
        for size in range(1, 7):
            board = board_cls(size, policy)
            board.seed_random(0.6, rng)
            for coord, _ in board:
                assert 0 <= board.living_neighbor_count(coord) <= 8

    def test_neighbor_count_full_board(self, board_cls):
        """Test full boards give 8 inside and fewer on clipped edges."""
        clipped = board_cls(4, EdgePolicy.CLIPPED)
        clipped.seed_random(1.0, np.random.default_rng(0))
        assert clipped.living_neighbor_count(Coordinate(0, 0)) == 3
        assert clipped.living_neighbor_count(Coordinate(0, 1)) == 5
        assert clipped.living_neighbor_count(Coordinate(1, 1)) == 8

        toroidal = board_cls(4, EdgePolicy.TOROIDAL)
        toroidal.seed_random(1.0, np.random.default_rng(0))
        assert toroidal.living_neighbor_count(Coordinate(0, 0)) == 8

    def test_single_cell_torus_counts_itself(self, board_cls):
        """Test a 1x1 torus sees its only cell 8 times."""
        board = make_board(board_cls, 1, EdgePolicy.TOROIDAL, [Coordinate(0, 0)])
        assert board.living_neighbor_count(Coordinate(0, 0)) == 8
        assert board.advance().population == 0

    def test_advance_regression(self, board_cls):
        """Test one advance of the 3x3 regression board uses simultaneous updates."""
        board = make_board(board_cls, 3, EdgePolicy.CLIPPED, Board.from_cells(REGRESSION_CELLS).living_cells())
        next_board = board.advance()

        assert list(next_board.cells) == [False, True, True, False, True, True, False, False, False]

    def test_advance_toroidal_regression_fills_board(self, board_cls):
        """Test the regression board on a 3x3 torus fills every cell."""
        board = make_board(board_cls, 3, EdgePolicy.TOROIDAL, Board.from_cells(REGRESSION_CELLS).living_cells())
        assert board.advance().population == 9

    def test_advance_does_not_mutate(self, board_cls):
        """Test the previous generation stays intact after advancing."""
        board = make_board(board_cls, 5, EdgePolicy.TOROIDAL, [(2, 1), (2, 2), (2, 3)])
        before = board.snapshot()

        next_board = board.advance()

        assert next_board is not board
        assert board.snapshot() == before
        assert next_board.snapshot() != before
        assert next_board.size == board.size
        assert next_board.policy is board.policy

    def test_still_life_block(self, board_cls):
        """Test a 2x2 block is unchanged on a 4x4 torus."""
        block = {Coordinate(1, 1), Coordinate(1, 2), Coordinate(2, 1), Coordinate(2, 2)}
        board = make_board(board_cls, 4, EdgePolicy.TOROIDAL, block)

        for _ in range(5):
            board = board.advance()
            assert board.living_cells() == block

    def test_blinker_oscillator(self, board_cls):
        """Test a blinker alternates between horizontal and vertical on a 5x5 torus."""
        horizontal = {Coordinate(2, 1), Coordinate(2, 2), Coordinate(2, 3)}
        vertical = {Coordinate(1, 2), Coordinate(2, 2), Coordinate(3, 2)}
        board = make_board(board_cls, 5, EdgePolicy.TOROIDAL, horizontal)

        board = board.advance()
        assert board.living_cells() == vertical

        board = board.advance()
        assert board.living_cells() == horizontal

    def test_blinker_against_clipped_edge(self, board_cls):
        """Test a blinker touching the top edge loses its top arm when clipped."""
        board = make_board(board_cls, 5, EdgePolicy.CLIPPED, [(0, 1), (0, 2), (0, 3)])
        assert board.advance().living_cells() == {Coordinate(0, 2), Coordinate(1, 2)}

    def test_blinker_wraps_across_edge(self, board_cls):
        """Test a blinker on the top row grows across the edge on a torus."""
        board = make_board(board_cls, 5, EdgePolicy.TOROIDAL, [(0, 1), (0, 2), (0, 3)])
        assert board.advance().living_cells() == {Coordinate(4, 2), Coordinate(0, 2), Coordinate(1, 2)}

    def test_extinction(self, board_cls, policy):
        """Test a lone cell dies."""
        board = make_board(board_cls, 5, policy, [(2, 2)])
        assert board.advance().population == 0

    def test_determinism(self, board_cls, policy):
        """Test identical seeds evolve identically regardless of interleaved reads."""
        living = [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2), (4, 4)]
        first = make_board(board_cls, 6, policy, living)
        second = make_board(board_cls, 6, policy, living)

        for _ in range(10):
            # Read-only queries on only one of the two boards
            for coord, _ in first:
                first.living_neighbor_count(coord)
                first.is_alive(coord)
            first.snapshot()

            first = first.advance()
            second = second.advance()
            assert first.snapshot() == second.snapshot()

    def test_cells_are_read_only(self, board_cls):
        """Test the exposed cell array cannot be written."""
        board = board_cls(3)
        with pytest.raises(ValueError):
            board.cells[0] = True

    def test_iteration(self, board_cls):
        """Test iteration yields every cell in row-major order."""
        board = make_board(board_cls, 2, EdgePolicy.CLIPPED, [(1, 0)])
        assert list(board) == [
            (Coordinate(0, 0), False),
            (Coordinate(0, 1), False),
            (Coordinate(1, 0), True),
            (Coordinate(1, 1), False),
        ]

    def test_copy(self, board_cls):
        """Test copies are equal but independent."""
        board = make_board(board_cls, 3, EdgePolicy.CLIPPED, [(0, 0)])
        copy = board.copy()
        assert copy == board

        copy.seed_cells([(1, 1)])
        assert board.living_cells() == {Coordinate(0, 0)}

    def test_equality(self, board_cls):
        """Test equality depends on size, policy and cells."""
        board = make_board(board_cls, 3, EdgePolicy.CLIPPED, [(0, 0)])
        assert board == make_board(board_cls, 3, EdgePolicy.CLIPPED, [(0, 0)])
        assert board != make_board(board_cls, 3, EdgePolicy.TOROIDAL, [(0, 0)])
        assert board != make_board(board_cls, 3, EdgePolicy.CLIPPED, [(0, 1)])
        assert board != make_board(board_cls, 4, EdgePolicy.CLIPPED, [(0, 0)])
        assert board != "not a board"

    def test_str(self, board_cls):
        """Test string rendering with '*' and '.'."""
        board = make_board(board_cls, 3, EdgePolicy.CLIPPED, Board.from_cells(REGRESSION_CELLS).living_cells())
        assert str(board) == ".**\n.*.\n..."


class TestDenseBoard:
    """Test cases specific to the numpy-backed Board."""

    def test_torch_threads_configured_once(self, rng):
        """Test creating and advancing boards leaves torch settings alone."""
        assert torch.get_num_threads() == 1

        with patch("torch.set_num_threads") as mock_threads:
            board = Board(5, EdgePolicy.TOROIDAL)
            board.seed_random(0.5, rng)
            board.advance().advance().copy()
            Board.from_cells(REGRESSION_CELLS)

        mock_threads.assert_not_called()

    def test_from_cells(self):
        """Test building a board from a flat row-major sequence."""
        board = Board.from_cells(REGRESSION_CELLS, EdgePolicy.TOROIDAL)
        assert board.size == 3
        assert board.policy is EdgePolicy.TOROIDAL
        assert board.living_cells() == {Coordinate(0, 1), Coordinate(0, 2), Coordinate(1, 1)}

    @pytest.mark.parametrize("length", [0, 2, 5, 8])
    def test_from_cells_not_square(self, length):
        """Test non-square cell counts are rejected."""
        with pytest.raises(InvalidDimension):
            Board.from_cells([False] * length)

    def test_count_all_neighbors_matches_per_cell(self, policy):
        """Test the convolution agrees with per-cell counting."""
        rng = np.random.default_rng(3)
        for size in range(1, 8):
            board = Board(size, policy)
            board.seed_random(0.5, rng)
            counts = board.count_all_neighbors()

            assert counts.shape == (size * size,)
            for i in range(size * size):
                assert counts[i] == board.living_neighbor_count(Coordinate.from_index(i, size))

    def test_count_all_neighbors_regression(self, regression_board):
        """Test whole-board counts of the regression fixture."""
        assert list(regression_board.count_all_neighbors()) == [2, 2, 2, 2, 2, 3, 1, 1, 1]

    def test_repr(self, regression_board):
        """Test repr shows size, policy and population."""
        assert repr(regression_board) == "Board(size=3, policy=clipped, population=3)"


class TestGeneration:
    """Test cases for the immutable snapshot."""

    def test_snapshot(self, regression_board):
        """Test snapshots copy the board's cells."""
        generation = regression_board.snapshot()
        assert generation.size == 3
        assert generation.cells == tuple(REGRESSION_CELLS)
        assert generation.population == 3

    def test_immutable(self, regression_board):
        """Test snapshots cannot be modified."""
        generation = regression_board.snapshot()
        with pytest.raises(dataclasses.FrozenInstanceError):
            generation.cells = ()

    def test_rows(self, regression_board):
        """Test splitting into rows."""
        assert regression_board.snapshot().rows() == [
            (False, True, True),
            (False, True, False),
            (False, False, False),
        ]

    def test_is_alive(self, regression_board):
        """Test reading a cell from a snapshot."""
        generation = regression_board.snapshot()
        assert generation.is_alive(Coordinate(0, 1))
        assert not generation.is_alive((2, 2))

        with pytest.raises(OutOfBounds):
            generation.is_alive(Coordinate(3, 3))

    def test_living_cells(self, regression_board):
        """Test living cells of a snapshot."""
        assert regression_board.snapshot().living_cells() == regression_board.living_cells()

    def test_wrong_length(self):
        """Test a snapshot must hold size*size cells."""
        with pytest.raises(InvalidDimension):
            Generation(3, (True,) * 8)
