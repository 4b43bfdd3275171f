from pathlib import Path
import json
import sys

# Ensure the project root is on the Python path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from generator import export_maze_layout, generate, load_maze_layout, rng_seeded_with
from maze_graph import LayoutError


def test_world_positions(tmp_path):
    """position_world is the maze coordinate scaled by the cell size on the x/z plane."""
    path = tmp_path / "layout.json"
    maze = generate(4, 3, 0, 0, rng_seeded_with(17))
    export_maze_layout(maze, path, seed=17, cell_size=4.0)

    layout = json.loads(path.read_text(encoding="utf8"))
    assert layout["width"] == 4 and layout["height"] == 3
    for entry in layout["cells"]:
        x, y = entry["position_maze"]
        assert entry["position_world"] == [x * 4.0, 0.0, y * 4.0]


def test_layout_reload_restores_maze(tmp_path):
    path = tmp_path / "layout.json"
    maze = generate(6, 5, 2, 2, rng_seeded_with(3))
    export_maze_layout(maze, path, seed=3, start=(2, 2), key=(3, 1), cell_size=2.5, exit_on_top_wall=False)

    layout = load_maze_layout(path)
    assert layout.maze == maze
    assert layout.seed == 3
    assert layout.start == (2, 2)
    assert layout.exit == (5, 4)
    assert layout.key == (3, 1)
    assert layout.cell_size == 2.5
    assert layout.exit_on_top_wall is False


def test_exit_cell_walls_in_layout(tmp_path):
    path = tmp_path / "layout.json"
    maze = generate(3, 3, 0, 0, rng_seeded_with(8))
    export_maze_layout(maze, path)

    cells = json.loads(path.read_text(encoding="utf8"))["cells"]
    exit_entry = [c for c in cells if c["exit"]]
    assert len(exit_entry) == 1
    assert exit_entry[0]["position_maze"] == [2, 2]
    assert exit_entry[0]["walls"]["top"] is False
    # stored wall stays closed so the maze reloads unchanged
    assert exit_entry[0]["top_wall"] is True


@pytest.mark.parametrize("content", [
    "not json",
    '{"width": 2}',
    '{"width": 1, "height": 1, "cells": [{"position_maze": [3, 0], "top_wall": true, "left_wall": true}]}',
    '{"width": 1, "height": 1, "cell_size": "abc",'
    ' "cells": [{"position_maze": [0, 0], "top_wall": true, "left_wall": true}]}',
    '{"width": 1, "height": 1, "cell_size": [4],'
    ' "cells": [{"position_maze": [0, 0], "top_wall": true, "left_wall": true}]}',
    '[1, 2]',
])
def test_bad_layout_raises(tmp_path, content):
    path = tmp_path / "layout.json"
    path.write_text(content, encoding="utf8")
    with pytest.raises(LayoutError):
        load_maze_layout(path)
