from pathlib import Path
import sys

# Ensure the project root is on the Python path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import tester
from maze_graph import Maze


def test_closed_grid_fails_checks():
    problems = tester.check_maze(Maze.create(2, 2))
    assert any("passages" in p for p in problems)
    assert any("reachable" in p for p in problems)


def test_loop_is_reported():
    # every interior wall of a 2x2 grid removed: four passages, one cycle
    top = [[False, True], [False, True]]
    left = [[True, True], [False, False]]
    problems = tester.check_maze(Maze.from_walls(2, 2, top, left))
    assert problems == ["expected 3 passages, got 4"]


def test_open_perimeter_is_reported():
    top = [[True], [True]]
    left = [[False], [False]]
    problems = tester.check_maze(Maze.from_walls(2, 1, top, left))
    assert problems == ["cell (0, 0) is missing its left boundary wall"]


def test_reachable_cells_follow_open_walls():
    top = [[False, True], [True, True]]
    left = [[True, True], [True, True]]
    maze = Maze.from_walls(2, 2, top, left)
    assert tester.reachable_cells(maze) == {(0, 0), (0, 1)}
    assert tester.reachable_cells(maze, (1, 1)) == {(1, 1)}


def test_cli_passes(capsys):
    assert tester.main(["6", "4", "--seed", "3"]) == 0
    assert "All checks passed" in capsys.readouterr().out


def test_cli_rejects_bad_dimensions(capsys):
    assert tester.main(["0", "4", "--seed", "3"]) == 1
    assert "Error" in capsys.readouterr().out
