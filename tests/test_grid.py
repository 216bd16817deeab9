"""
Tests for the grid model: construction, adjacency, editing and map files.
"""

import json
from pathlib import Path

import pytest

import pathviz
from pathviz.app.settings import MAP_DIR
from pathviz.core.errors import InvalidGridSize, MapFormatError
from pathviz.core.grid import (
    Board,
    Tool,
    build_grid,
    cleared,
    from_rows,
    from_walls,
    load_map,
    neighbors,
    save_map,
    toggle_wall,
    with_wall,
)
from pathviz.core.runner import Variant, run_all
from pathviz.core.types import BLOCK, OPEN, Grid


class TestConstruction:
    def test_build_grid_is_open(self):
        grid = build_grid(4)
        assert grid.size == 4
        assert all(v == OPEN for row in grid.cells for v in row)
        assert grid.walls == []

    def test_single_cell_grid(self):
        grid = build_grid(1)
        assert grid.in_bounds((0, 0))
        assert neighbors(grid, (0, 0)) == []

    @pytest.mark.parametrize("size", [0, -3])
    def test_build_grid_rejects_small_sizes(self, size):
        with pytest.raises(InvalidGridSize):
            build_grid(size)

    def test_ragged_rows_rejected(self):
        with pytest.raises(InvalidGridSize):
            from_rows([[0, 0], [0]])

    def test_non_square_rejected(self):
        with pytest.raises(InvalidGridSize):
            Grid(2, ((0, 0),))

    def test_from_rows_marks_truthy_cells_as_walls(self):
        grid = from_rows([[0, 1], [2, 0]])
        assert grid.cells == ((OPEN, BLOCK), (BLOCK, OPEN))
        assert grid.walls == [(0, 1), (1, 0)]

    def test_from_walls(self):
        grid = from_walls(3, [(1, 1)])
        assert grid.is_block((1, 1))
        assert not grid.is_block((0, 0))


class TestNeighbors:
    def test_order_is_up_down_left_right(self):
        grid = build_grid(3)
        assert neighbors(grid, (1, 1)) == [(0, 1), (2, 1), (1, 0), (1, 2)]

    def test_corner_drops_out_of_bounds(self):
        grid = build_grid(3)
        assert neighbors(grid, (0, 0)) == [(1, 0), (0, 1)]
        assert neighbors(grid, (2, 2)) == [(1, 2), (2, 1)]

    def test_walls_are_excluded(self):
        grid = from_walls(3, [(0, 1), (1, 2)])
        assert neighbors(grid, (1, 1)) == [(2, 1), (1, 0)]


class TestEditing:
    def test_with_wall_returns_new_grid(self):
        grid = build_grid(3)
        walled = with_wall(grid, (1, 1))
        assert walled.is_block((1, 1))
        assert not grid.is_block((1, 1))

    def test_with_wall_noop_returns_same_object(self):
        grid = build_grid(3)
        assert with_wall(grid, (0, 0), False) is grid

    def test_toggle_and_clear(self):
        grid = toggle_wall(build_grid(3), (2, 0))
        assert grid.is_block((2, 0))
        assert not toggle_wall(grid, (2, 0)).is_block((2, 0))
        assert not cleared(grid, (2, 0)).is_block((2, 0))

    def test_grid_is_frozen(self):
        grid = build_grid(2)
        with pytest.raises(AttributeError):
            grid.size = 3


class TestBoard:
    @pytest.fixture
    def board(self):
        return Board.empty(8)

    def test_wall_tool_toggles_on_click_and_adds_on_paint(self, board):
        board.apply((2, 2))
        assert board.grid.is_block((2, 2))
        board.apply((2, 2))
        assert not board.grid.is_block((2, 2))
        board.apply((2, 2), paint=True)
        board.apply((2, 2), paint=True)
        assert board.grid.is_block((2, 2))

    def test_placing_endpoint_clears_wall(self, board):
        board.apply((3, 3))
        board.tool = Tool.START
        board.apply((3, 3))
        assert board.start == (3, 3)
        assert not board.grid.is_block((3, 3))

        board.apply((4, 4))
        board.tool = Tool.TARGET
        board.apply((4, 4))
        assert board.target == (4, 4)
        assert not board.grid.is_block((4, 4))

    def test_walls_never_painted_over_endpoints(self, board):
        board.tool = Tool.START
        board.apply((0, 0))
        board.tool = Tool.WALL
        board.apply((0, 0))
        board.apply((0, 0), paint=True)
        assert not board.grid.is_block((0, 0))

    def test_out_of_bounds_click_ignored(self, board):
        before = board.grid
        board.apply((8, 0))
        assert board.grid is before

    def test_resize_and_clear_reset_endpoints(self, board):
        board.tool = Tool.START
        board.apply((1, 1))
        board.resize(10)
        assert board.size == 10
        assert board.start is None and board.target is None

        board.tool = Tool.WALL
        board.apply((5, 5))
        board.clear()
        assert board.size == 10
        assert board.grid.walls == []

    @pytest.mark.parametrize("requested, expected", [(2, 8), (8, 8), (20, 20), (35, 35), (99, 35)])
    def test_resize_clamps_to_editor_bounds(self, board, requested, expected):
        board.resize(requested)
        assert board.size == expected

    def test_clear_keeps_size(self):
        board = Board(from_walls(3, [(1, 1)]), start=(0, 0), target=(2, 2))
        board.clear()
        assert board.size == 3
        assert board.grid.walls == []
        assert board.start is None

    def test_readiness_messages(self, board):
        assert board.readiness(True) == "Place a start and target node to begin."
        board.start = (0, 0)
        assert board.readiness(True) == "Place a target node."
        board.start, board.target = None, (1, 1)
        assert board.readiness(True) == "Place a start node."
        board.start = (0, 0)
        assert board.readiness(False) == "Select at least one algorithm to run."
        assert board.readiness(True) == "Ready to visualize."
        assert board.is_ready()


class TestMapFiles:
    def test_save_then_load(self, tmp_path):
        board = Board(from_walls(4, [(1, 2), (3, 0)]), start=(0, 0), target=(3, 3))
        path = tmp_path / "board.json"
        save_map(board, path)

        loaded = load_map(path)
        assert loaded.grid == board.grid
        assert loaded.start == (0, 0)
        assert loaded.target == (3, 3)

    def test_missing_endpoints_load_as_none(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps({"size": 2, "cells": [[0, 0], [0, 1]]}))
        board = load_map(path)
        assert board.start is None and board.target is None
        assert board.grid.is_block((1, 1))

    @pytest.mark.parametrize("payload", [
        "not json",
        json.dumps({"cells": [[0]]}),
        json.dumps({"size": 3, "cells": [[0, 0], [0, 0]]}),
        json.dumps({"size": 2, "cells": [[0, 0], [0]]}),
        json.dumps({"size": 2, "cells": [[0, 0], [0, 0]], "start": [5, 5]}),
    ])
    def test_malformed_maps(self, tmp_path, payload):
        path = tmp_path / "bad.json"
        path.write_text(payload)
        with pytest.raises(MapFormatError):
            load_map(path)

    def test_walls_under_endpoints_are_cleared(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps({"size": 2, "start": [0, 0], "target": [1, 1],
                                    "cells": [[1, 1], [0, 1]]}))
        board = load_map(path)
        assert not board.grid.is_block((0, 0))
        assert not board.grid.is_block((1, 1))
        assert board.grid.is_block((0, 1))

        results = run_all(board.grid, board.start, board.target, set(Variant))
        assert all(r.found for r in results.values())

    def test_missing_file(self, tmp_path):
        with pytest.raises(MapFormatError):
            load_map(tmp_path / "nope.json")

    def test_bundled_maps_ship_inside_the_package(self):
        assert MAP_DIR.parent == Path(pathviz.__file__).resolve().parent
        assert (MAP_DIR / "01_open_field.json").is_file()

    @pytest.mark.parametrize("name", ["01_open_field.json", "02_walled_maze.json"])
    def test_bundled_maps_load(self, name):
        board = load_map(MAP_DIR / name)
        assert board.is_ready()
        assert not board.grid.is_block(board.start)
        assert not board.grid.is_block(board.target)
