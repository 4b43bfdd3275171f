from pathlib import Path
import sys

# Ensure the project root is on the Python path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from maze_graph import InvalidDimension, Maze, MazeCell, WallSet, derive_walls


def test_create_allocates_closed_cells():
    maze = Maze.create(4, 3)
    assert (maze.width, maze.height) == (4, 3)
    assert len(maze) == 12
    assert len(list(maze)) == 12
    for cell in maze:
        assert cell.top_wall and cell.left_wall
    assert maze.passages() == []


@pytest.mark.parametrize("width, height", [(0, 5), (5, 0), (-1, 3), (0, 0)])
def test_create_rejects_small_dimensions(width, height):
    with pytest.raises(InvalidDimension):
        Maze.create(width, height)


def test_invalid_dimension_is_a_value_error():
    with pytest.raises(ValueError):
        Maze.create(2.5, 3)


@pytest.mark.parametrize("width, height", [(True, 2), (2, False), ("3", 3)])
def test_non_integer_dimensions_rejected(width, height):
    with pytest.raises(InvalidDimension):
        Maze.create(width, height)


def test_numpy_integer_dimensions_accepted():
    np = pytest.importorskip("numpy")
    maze = Maze.create(np.int64(3), np.int32(2))
    assert (maze.width, maze.height) == (3, 2)
    assert type(maze.width) is int
    assert len(maze) == 6


def test_cells_scan_x_outer_y_inner():
    positions = [cell.position for cell in Maze.create(2, 2)]
    assert positions == [(0, 0), (0, 1), (1, 0), (1, 1)]


def test_is_in_bounds():
    maze = Maze.create(3, 2)
    assert maze.is_in_bounds(0, 0)
    assert maze.is_in_bounds(2, 1)
    assert not maze.is_in_bounds(3, 0)
    assert not maze.is_in_bounds(0, 2)
    assert not maze.is_in_bounds(-1, 0)


def test_cell_out_of_bounds_raises():
    with pytest.raises(IndexError):
        Maze.create(2, 2).cell(2, 0)


def test_derive_walls_boundary_rule():
    # interior cell keeps only its stored walls
    assert derive_walls(True, False, 1, 1, 3) == WallSet(top=True, bottom=False, left=False, right=False)
    # south row and east column are closed
    assert derive_walls(False, False, 2, 0, 3) == WallSet(top=False, bottom=True, left=False, right=True)


def test_walls_of_single_cell_is_enclosed():
    maze = Maze.create(1, 1)
    assert maze.walls_of(maze.cell(0, 0)) == (True, True, True, True)
    assert maze.walls_of((0, 0)) == WallSet(True, True, True, True)


def test_from_walls_and_open_neighbours():
    # 2x2: (0,0) -> (0,1) north, (0,0) -> (1,0) east
    top = [[False, True], [True, True]]
    left = [[True, True], [False, True]]
    maze = Maze.from_walls(2, 2, top, left)
    assert sorted(maze.open_neighbours(0, 0)) == [(0, 1), (1, 0)]
    assert maze.open_neighbours(0, 1) == [(0, 0)]
    assert maze.open_neighbours(1, 0) == [(0, 0)]
    assert maze.open_neighbours(1, 1) == []
    assert sorted(maze.passages()) == [((0, 0), (0, 1)), ((1, 0), (0, 0))]


def test_from_walls_shape_mismatch():
    with pytest.raises(InvalidDimension):
        Maze.from_walls(2, 2, [[True, True]], [[True, True], [True, True]])


def test_misplaced_cell_rejected():
    with pytest.raises(ValueError):
        Maze(1, 2, [[MazeCell(0, 1), MazeCell(0, 0)]])


def test_maze_is_an_immutable_value():
    a = Maze.create(2, 3)
    b = Maze.create(2, 3)
    assert a == b
    assert hash(a) == hash(b)
    with pytest.raises(AttributeError):
        a.cell(0, 0).top_wall = False
    with pytest.raises(AttributeError):
        a.width = 5
