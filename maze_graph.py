"""Grid data model for perfect mazes.

A maze is a ``width x height`` array of :class:`MazeCell`. Only the top and
left wall of every cell is stored; the bottom and right walls are derived:
the bottom wall of a cell is the top wall of the cell below it, the right
wall is the left wall of the cell to its right, and the south row (``y == 0``)
and east column (``x == width - 1``) are closed by the outer boundary.

The ``+y`` direction is "top"/north.
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Iterator, List, NamedTuple, Sequence, Tuple, Union

Position = Tuple[int, int]


class MazeError(Exception):
    """Base class for maze errors."""


class InvalidDimension(MazeError, ValueError):
    """Raised when a grid is requested with a width or height below 1."""


class LayoutError(MazeError, ValueError):
    """Raised when a stored maze layout or seed record cannot be read."""


@dataclass(frozen=True)
class MazeCell:
    """One grid position and the two walls it owns."""
    x: int
    y: int
    top_wall: bool = True   # shared with the cell at (x, y + 1)
    left_wall: bool = True  # shared with the cell at (x - 1, y)

    @property
    def position(self) -> Position:
        return (self.x, self.y)


class WallSet(NamedTuple):
    """Four-sided wall configuration of a single cell."""
    top: bool
    bottom: bool
    left: bool
    right: bool


def derive_walls(top_wall: bool, left_wall: bool, x: int, y: int, width: int) -> WallSet:
    """Derive the wall tuple a renderer needs from a cell's stored walls.

    Args:
        top_wall: stored top wall flag of the cell
        left_wall: stored left wall flag of the cell
        x: column of the cell
        y: row of the cell
        width: grid width

    Returns:
        ``WallSet(top, bottom, left, right)``
    """
    return WallSet(
        top=top_wall,
        bottom=(y == 0),
        left=left_wall,
        right=(x == width - 1),
    )


def check_dimensions(width: int, height: int) -> Tuple[int, int]:
    """Validate grid dimensions and return them as plain ints."""
    for value in (width, height):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral):
            raise InvalidDimension(f"maze dimensions must be integers, got {width!r} x {height!r}")
    width, height = int(width), int(height)
    if width < 1 or height < 1:
        raise InvalidDimension(f"maze dimensions must be at least 1x1, got {width}x{height}")
    return width, height


class Maze:
    """Immutable ``width x height`` grid of :class:`MazeCell`.

    Cells are indexed ``[x][y]``. Iteration yields them in scanning order,
    ``x`` outer and ``y`` inner.
    """

    def __init__(self, width: int, height: int, cells: Sequence[Sequence[MazeCell]] = None):
        width, height = check_dimensions(width, height)
        self._width = width
        self._height = height
        if cells is None:
            cells = [[MazeCell(x, y) for y in range(height)] for x in range(width)]
        if len(cells) != width or any(len(column) != height for column in cells):
            raise InvalidDimension(f"cell array does not match a {width}x{height} grid")
        for x, column in enumerate(cells):
            for y, cell in enumerate(column):
                if cell.position != (x, y):
                    raise ValueError(f"cell {cell.position} stored at position {(x, y)}")
        self._cells: Tuple[Tuple[MazeCell, ...], ...] = tuple(tuple(column) for column in cells)

    @classmethod
    def create(cls, width: int, height: int) -> "Maze":
        """Allocate a grid with every wall present."""
        return cls(width, height)

    @classmethod
    def from_walls(cls, width: int, height: int,
                   top_walls: Sequence[Sequence[bool]],
                   left_walls: Sequence[Sequence[bool]]) -> "Maze":
        """Build a maze from ``[x][y]`` indexed wall flag arrays."""
        width, height = check_dimensions(width, height)
        for name, walls in (("top", top_walls), ("left", left_walls)):
            if len(walls) != width or any(len(column) != height for column in walls):
                raise InvalidDimension(f"{name} wall array does not match a {width}x{height} grid")
        cells = [
            [MazeCell(x, y, bool(top_walls[x][y]), bool(left_walls[x][y])) for y in range(height)]
            for x in range(width)
        ]
        return cls(width, height, cells)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def cell(self, x: int, y: int) -> MazeCell:
        if not self.is_in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self._width}x{self._height} maze")
        return self._cells[x][y]

    def walls_of(self, cell: Union[MazeCell, Position]) -> WallSet:
        """Return ``(top, bottom, left, right)`` for a cell or an ``(x, y)`` pair."""
        if not isinstance(cell, MazeCell):
            cell = self.cell(*cell)
        return derive_walls(cell.top_wall, cell.left_wall, cell.x, cell.y, self._width)

    def open_neighbours(self, x: int, y: int) -> List[Position]:
        """Cells reachable from ``(x, y)`` in one step through an absent wall."""
        cell = self.cell(x, y)
        result = []
        if y + 1 < self._height and not cell.top_wall:
            result.append((x, y + 1))
        if y > 0 and not self._cells[x][y - 1].top_wall:
            result.append((x, y - 1))
        if x > 0 and not cell.left_wall:
            result.append((x - 1, y))
        if x + 1 < self._width and not self._cells[x + 1][y].left_wall:
            result.append((x + 1, y))
        return result

    def passages(self) -> List[Tuple[Position, Position]]:
        """All open edges, each reported once from the cell owning the wall."""
        edges = []
        for cell in self:
            x, y = cell.position
            if not cell.top_wall and y + 1 < self._height:
                edges.append(((x, y), (x, y + 1)))
            if not cell.left_wall and x > 0:
                edges.append(((x, y), (x - 1, y)))
        return edges

    def __iter__(self) -> Iterator[MazeCell]:
        for column in self._cells:
            yield from column

    def __len__(self) -> int:
        return self._width * self._height

    def __eq__(self, other) -> bool:
        if not isinstance(other, Maze):
            return NotImplemented
        return (self._width, self._height, self._cells) == (other._width, other._height, other._cells)

    def __hash__(self) -> int:
        return hash((self._width, self._height, self._cells))

    def __repr__(self) -> str:
        return f"Maze(width={self._width}, height={self._height}, passages={len(self.passages())})"
