#!/usr/bin/env python3
"""Structural validator for generated mazes.

The script runs :func:`generator.generate` with the provided parameters and
checks that the result is a perfect maze:

* Every cell is reachable from every other cell.
* Exactly ``width * height - 1`` walls were carved, so there are no loops.
* The outer boundary is closed on all four sides.
"""

from __future__ import annotations

import argparse
from collections import deque
from typing import List, Sequence, Set

import generator
from maze_graph import Maze, MazeError, Position


def reachable_cells(maze: Maze, start: Position = (0, 0)) -> Set[Position]:
    """Breadth-first walk through open walls."""
    seen = {tuple(start)}
    queue = deque([tuple(start)])
    while queue:
        x, y = queue.popleft()
        for neighbour in maze.open_neighbours(x, y):
            if neighbour not in seen:
                seen.add(neighbour)
                queue.append(neighbour)
    return seen


def check_maze(maze: Maze) -> List[str]:
    """Return a description of every violated property; empty when valid."""
    problems = []
    cell_count = maze.width * maze.height

    passages = len(maze.passages())
    if passages != cell_count - 1:
        problems.append(f"expected {cell_count - 1} passages, got {passages}")

    reached = len(reachable_cells(maze))
    if reached != cell_count:
        problems.append(f"only {reached} of {cell_count} cells reachable from (0, 0)")

    for cell in maze:
        walls = maze.walls_of(cell)
        if cell.y == 0 and not walls.bottom:
            problems.append(f"cell {cell.position} is missing its bottom boundary wall")
        if cell.x == maze.width - 1 and not walls.right:
            problems.append(f"cell {cell.position} is missing its right boundary wall")
        if cell.y == maze.height - 1 and not walls.top:
            problems.append(f"cell {cell.position} is missing its top boundary wall")
        if cell.x == 0 and not walls.left:
            problems.append(f"cell {cell.position} is missing its left boundary wall")
    return problems


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Validate a generated maze")
    parser.add_argument("width", type=int, help="Number of columns")
    parser.add_argument("height", type=int, help="Number of rows")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--start-x", type=int, default=0, help="Start column")
    parser.add_argument("--start-y", type=int, default=0, help="Start row")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    seed = args.seed if args.seed is not None else generator.new_seed()
    try:
        maze = generator.generate(
            args.width,
            args.height,
            args.start_x,
            args.start_y,
            generator.rng_seeded_with(seed),
        )
    except MazeError as e:
        print(f"Error: {e}")
        return 1

    problems = check_maze(maze)
    if problems:
        for problem in problems:
            print(f"FAIL: {problem}")
        return 1

    print(f"All checks passed. {maze.width}x{maze.height} maze, seed {seed}, "
          f"{len(maze.passages())} passages.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
