"""Exit and key placement on a generated maze.

The generator only guarantees that every pair of cells is joined by exactly
one path; which cell becomes the exit and where the key lies is decided here.
None of these functions mutate the maze.
"""

from __future__ import annotations

import logging
from typing import Optional

from maze_graph import Maze, Position, WallSet

logger = logging.getLogger(__name__)


def exit_cell(maze: Maze) -> Position:
    """The exit is the far corner from the default start."""
    return (maze.width - 1, maze.height - 1)


def exit_walls(maze: Maze, exit_on_top_wall: bool = True,
               position: Optional[Position] = None) -> WallSet:
    """Wall tuple of the exit cell with its outer wall opened.

    Args:
        maze: generated maze
        exit_on_top_wall: open the top wall when True, the right wall otherwise
        position: exit cell, defaults to :func:`exit_cell`

    Returns:
        the exit cell's ``WallSet`` with the door side set to False
    """
    if position is None:
        position = exit_cell(maze)
    walls = maze.walls_of(tuple(position))
    if exit_on_top_wall:
        return walls._replace(top=False)
    return walls._replace(right=False)


def key_cell(maze: Maze, start: Position, exit: Position, rng) -> Optional[Position]:
    """Pick a random cell for the key, never the start or the exit.

    Interior cells (not on the outer ring) are preferred. Grids without an
    interior fall back to any other cell; ``None`` is returned when the start
    and the exit cover the whole grid.
    """
    excluded = {tuple(start), tuple(exit)}
    candidates = [
        cell.position for cell in maze
        if 1 <= cell.x < maze.width - 1 and 1 <= cell.y < maze.height - 1
        and cell.position not in excluded
    ]
    if not candidates:
        candidates = [cell.position for cell in maze if cell.position not in excluded]
    if not candidates:
        logger.debug("no free cell for the key in a %dx%d maze", maze.width, maze.height)
        return None
    return candidates[rng.randrange(len(candidates))]
