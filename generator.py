#!/usr/bin/env python3

import argparse
import json
import logging
import random
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import List, Tuple, Set, Optional, Sequence

from maze_graph import Maze, MazeError, LayoutError, Position, check_dimensions
from placement import exit_cell, exit_walls, key_cell

LAYOUT_PATH = Path("maze_layout.json")
SEED_PATH = Path("maze_seed.json")
SEED_RANGE = 999999

logger = logging.getLogger(__name__)

# 方向的抽取顺序，每检查一个格子都会重新打乱
DIRECTIONS: Tuple[Tuple[str, Tuple[int, int]], ...] = (
    ("up", (0, 1)),
    ("down", (0, -1)),
    ("left", (-1, 0)),
    ("right", (1, 0)),
)


@dataclass
class MazeConfig:
    """迷宫生成配置类，包含生成迷宫的各种参数"""
    width: int = 10
    height: int = 10
    start_x: int = 0
    start_y: int = 0
    seed: Optional[int] = None       # 为None时随机抽取种子
    cell_size: float = 4.0           # 每个格子的世界单位尺寸
    exit_on_top_wall: bool = True    # False 则在出口格子的右墙开门

    def validate(self) -> None:
        check_dimensions(self.width, self.height)
        if self.cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")


@dataclass(frozen=True)
class MazeSeed:
    """重建同一个迷宫所需的全部信息（种子、尺寸、起点）"""
    seed: int
    width: int
    height: int
    start_x: int = 0
    start_y: int = 0

    def regenerate(self) -> Maze:
        return generate(self.width, self.height, self.start_x, self.start_y, rng_seeded_with(self.seed))

    def save(self, path: Path = SEED_PATH) -> None:
        with Path(path).open("w", encoding="utf8") as f:
            json.dump(asdict(self), f)
        logger.info("saved maze seed %d (%dx%d) to %s", self.seed, self.width, self.height, path)

    @classmethod
    def load(cls, path: Path = SEED_PATH) -> "MazeSeed":
        """读取种子记录；旧记录没有起点字段时默认为 (0, 0)"""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf8"))
            record = cls(
                seed=int(data["seed"]),
                width=int(data["width"]),
                height=int(data["height"]),
                start_x=int(data.get("start_x", 0)),
                start_y=int(data.get("start_y", 0)),
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
            raise LayoutError(f"unreadable maze seed record {path}: {e}") from e
        check_dimensions(record.width, record.height)
        return record


def rng_seeded_with(seed: int) -> random.Random:
    return random.Random(seed)


def new_seed(rng=None) -> int:
    """为新迷宫抽取一个 ``[0, SEED_RANGE)`` 范围内的种子"""
    if rng is None:
        rng = random.Random()
    return rng.randrange(SEED_RANGE)


def normalise_start(width: int, height: int, start_x: int, start_y: int) -> Position:
    """越界的起点坐标回退到 ``(0, 0)``"""
    if 0 <= start_x < width and 0 <= start_y < height:
        return (start_x, start_y)
    logger.debug("start (%s, %s) outside %dx%d grid, using (0, 0)", start_x, start_y, width, height)
    return (0, 0)


class MazeGenerator:
    """随机回溯法的迷宫雕刻器。

    雕刻过程中由实例持有墙数组和已访问集合，
    :meth:`carve_path` 最终返回一个由它们构建的不可变 :class:`Maze`。
    """

    def __init__(self, width: int, height: int, rng):
        self.width, self.height = check_dimensions(width, height)
        self.rng = rng
        self.visited: Set[Position] = set()
        self.top_walls: List[List[bool]] = []
        self.left_walls: List[List[bool]] = []

    def reset(self) -> None:
        self.visited = set()
        self.top_walls = [[True] * self.height for _ in range(self.width)]
        self.left_walls = [[True] * self.height for _ in range(self.width)]

    def is_cell_open(self, x: int, y: int) -> bool:
        """检查格子是否在范围内且尚未被访问"""
        return 0 <= x < self.width and 0 <= y < self.height and (x, y) not in self.visited

    def random_directions(self) -> List[Tuple[int, int]]:
        """四个方向的随机排列，每个剩余选项抽取一次随机数"""
        remaining = [delta for _, delta in DIRECTIONS]
        shuffled = []
        while remaining:
            shuffled.append(remaining.pop(self.rng.randrange(len(remaining))))
        return shuffled

    def check_neighbours(self, cell: Position) -> Optional[Position]:
        """按新的随机顺序返回 ``cell`` 的第一个可用邻居，没有则返回None"""
        x, y = cell
        for dx, dy in self.random_directions():
            if self.is_cell_open(x + dx, y + dy):
                return (x + dx, y + dy)
        return None

    def break_walls(self, primary: Position, secondary: Position) -> None:
        """打通两个相邻格子之间的墙。

        ``primary`` 是离开的格子，``secondary`` 是进入的格子。
        墙只记录在拥有它的那个格子上（上墙或左墙）。
        """
        (px, py), (sx, sy) = primary, secondary
        if px > sx:
            self.left_walls[px][py] = False
        elif px < sx:
            self.left_walls[sx][sy] = False
        elif py < sy:
            self.top_walls[px][py] = False
        elif py > sy:
            self.top_walls[sx][sy] = False

    def carve_path(self, start_x: int, start_y: int) -> Maze:
        self.reset()
        start = normalise_start(self.width, self.height, start_x, start_y)
        self.visited.add(start)
        path = [start]
        carved = 0

        while path:
            current = path[-1]
            next_cell = self.check_neighbours(current)
            if next_cell is None:
                # 死路：弹出后直接检查新的栈顶，不再重新扫描被弹出的格子
                path.pop()
                continue
            self.break_walls(current, next_cell)
            self.visited.add(next_cell)
            path.append(next_cell)
            carved += 1

        logger.debug("carved %d passages in a %dx%d maze from %s", carved, self.width, self.height, start)
        return Maze.from_walls(self.width, self.height, self.top_walls, self.left_walls)


def generate(width: int, height: int, start_x: int = 0, start_y: int = 0, rng=None) -> Maze:
    """生成一个完美迷宫

    Args:
        width: 列数，至少为1
        height: 行数，至少为1
        start_x: 开始雕刻的列
        start_y: 开始雕刻的行
        rng: 带有 ``randrange(n)`` 方法的随机源；为None时使用未设种子的 ``random.Random``

    Returns:
        新的不可变 :class:`Maze`

    Raises:
        InvalidDimension: 宽或高小于1
    """
    if rng is None:
        rng = random.Random()
    return MazeGenerator(width, height, rng).carve_path(start_x, start_y)


def build_maze(config: MazeConfig) -> Tuple[Maze, MazeSeed, random.Random]:
    """按配置生成迷宫

    返回迷宫、对应的种子记录，以及已消耗完迷宫抽取的随机源，
    后续的钥匙放置从这个随机源继续抽取。
    """
    config.validate()
    seed = config.seed if config.seed is not None else new_seed()
    start_x, start_y = normalise_start(config.width, config.height, config.start_x, config.start_y)
    rng = rng_seeded_with(seed)
    maze = generate(config.width, config.height, start_x, start_y, rng)
    return maze, MazeSeed(seed, config.width, config.height, start_x, start_y), rng


def export_maze_layout(maze: Maze, path: Path = LAYOUT_PATH, seed: Optional[int] = None,
                       start: Position = (0, 0), key: Optional[Position] = None,
                       cell_size: float = 4.0, exit_on_top_wall: bool = True) -> None:
    """将每个格子的墙布局导出为JSON文件"""
    exit_pos = exit_cell(maze)
    cells = []
    for cell in maze:
        is_exit = cell.position == exit_pos
        walls = exit_walls(maze, exit_on_top_wall) if is_exit else maze.walls_of(cell)
        cells.append({
            "position_maze": [cell.x, cell.y],
            "position_world": [cell.x * cell_size, 0.0, cell.y * cell_size],
            "top_wall": cell.top_wall,
            "left_wall": cell.left_wall,
            "walls": walls._asdict(),
            "start": cell.position == tuple(start),
            "exit": is_exit,
            "key": key is not None and cell.position == tuple(key),
        })
    layout = {
        "width": maze.width,
        "height": maze.height,
        "seed": seed,
        "cell_size": cell_size,
        "exit_on_top_wall": exit_on_top_wall,
        "cells": cells,
    }
    # 保存到文件（不换行）
    with Path(path).open("w", encoding="utf8") as f:
        json.dump(layout, f, separators=(',', ':'))

    logger.info("exported %d cells to %s", len(cells), path)


@dataclass
class MazeLayout:
    """从导出的布局文件读回的迷宫"""
    maze: Maze
    seed: Optional[int]
    start: Position
    exit: Position
    key: Optional[Position]
    cell_size: float
    exit_on_top_wall: bool


def load_maze_layout(path: Path = LAYOUT_PATH) -> MazeLayout:
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf8"))
        width, height = check_dimensions(int(data["width"]), int(data["height"]))
        top_walls = [[True] * height for _ in range(width)]
        left_walls = [[True] * height for _ in range(width)]
        start, exit_pos, key = (0, 0), (width - 1, height - 1), None
        for entry in data["cells"]:
            x, y = (int(v) for v in entry["position_maze"])
            if not (0 <= x < width and 0 <= y < height):
                raise LayoutError(f"cell ({x}, {y}) outside {width}x{height} layout in {path}")
            top_walls[x][y] = bool(entry["top_wall"])
            left_walls[x][y] = bool(entry["left_wall"])
            if entry.get("start"):
                start = (x, y)
            if entry.get("exit"):
                exit_pos = (x, y)
            if entry.get("key"):
                key = (x, y)
        maze = Maze.from_walls(width, height, top_walls, left_walls)
        layout = MazeLayout(
            maze=maze,
            seed=data.get("seed"),
            start=start,
            exit=exit_pos,
            key=key,
            cell_size=float(data.get("cell_size", 4.0)),
            exit_on_top_wall=bool(data.get("exit_on_top_wall", True)),
        )
    except MazeError:
        raise
    except (json.JSONDecodeError, KeyError, TypeError, ValueError, AttributeError) as e:
        raise LayoutError(f"unreadable maze layout {path}: {e}") from e
    return layout


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = MazeConfig()
    parser = argparse.ArgumentParser(description="根据种子生成完美迷宫")
    parser.add_argument("--width", type=int, default=defaults.width, help="列数")
    parser.add_argument("--height", type=int, default=defaults.height, help="行数")
    parser.add_argument("--seed", type=int, default=None, help="随机种子（省略则随机抽取）")
    parser.add_argument("--start-x", type=int, default=defaults.start_x, help="起点列")
    parser.add_argument("--start-y", type=int, default=defaults.start_y, help="起点行")
    parser.add_argument("--cell-size", type=float, default=defaults.cell_size, help="每个格子的世界单位尺寸")
    parser.add_argument("--exit-on-right", action="store_true", help="在出口格子的右墙开门")
    parser.add_argument("--layout", type=Path, default=LAYOUT_PATH, help="布局JSON输出路径")
    parser.add_argument("--save", type=Path, default=None, help="种子记录保存路径")
    parser.add_argument("--load", type=Path, default=None, help="从种子记录重建迷宫")
    parser.add_argument("-v", "--verbose", action="store_true", help="输出生成过程日志")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = MazeConfig(
        width=args.width,
        height=args.height,
        start_x=args.start_x,
        start_y=args.start_y,
        seed=args.seed,
        cell_size=args.cell_size,
        exit_on_top_wall=not args.exit_on_right,
    )
    try:
        if args.load is not None:
            record = MazeSeed.load(args.load)
            print(f"从 {args.load} 加载了种子 {record.seed} ({record.width}x{record.height})")
            config.width, config.height, config.seed = record.width, record.height, record.seed
            config.start_x, config.start_y = record.start_x, record.start_y

        maze, record, rng = build_maze(config)
        start = (record.start_x, record.start_y)
        key = key_cell(maze, start, exit_cell(maze), rng)

        export_maze_layout(maze, args.layout, seed=record.seed, start=start, key=key,
                           cell_size=config.cell_size, exit_on_top_wall=config.exit_on_top_wall)
        if args.save is not None:
            record.save(args.save)
    except (MazeError, ValueError, OSError) as e:
        print(f"错误: {e}")
        return 1

    print("\n=== 迷宫生成完成 ===")
    print(f"尺寸: {maze.width}x{maze.height}，种子: {record.seed}")
    print(f"起点: {start}  出口: {exit_cell(maze)}  钥匙: {key}")
    print(f"通道数量: {len(maze.passages())}")
    print(f"迷宫布局已导出到 {args.layout}")
    if args.save is not None:
        print(f"种子记录已保存到 {args.save}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
