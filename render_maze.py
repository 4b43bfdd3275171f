#!/usr/bin/env python3
"""迷宫俯视图渲染。

读取 ``generator.py`` 导出的布局JSON，以ASCII字符画或matplotlib墙体图的方式绘制。
每个格子按推导出的 ``(top, bottom, left, right)`` 绘制自己的墙，
相邻格子共享的内墙只会画一次。
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.collections import LineCollection

from generator import LAYOUT_PATH, MazeLayout, load_maze_layout
from maze_graph import Maze, MazeError, Position, WallSet
from placement import exit_walls

# 特殊格子的标记样式
CELL_STYLES = {
    "start": {"color": "green", "marker": "o", "size": 80, "label": "start", "symbol": "S"},
    "exit": {"color": "red", "marker": "s", "size": 80, "label": "exit", "symbol": "E"},
    "key": {"color": "gold", "marker": "*", "size": 120, "label": "key", "symbol": "K"},
}


def _cell_walls(maze: Maze, x: int, y: int, exit: Optional[Position],
                exit_on_top_wall: bool) -> WallSet:
    if exit is not None and (x, y) == tuple(exit):
        return exit_walls(maze, exit_on_top_wall, (x, y))
    return maze.walls_of((x, y))


def render_ascii(maze: Maze, start: Optional[Position] = None, exit: Optional[Position] = None,
                 key: Optional[Position] = None, exit_on_top_wall: bool = True) -> str:
    """将迷宫绘制为文本，北方（``+y``）朝上。

    每个格子宽三个字符，角点为 ``+``。
    """
    rows = 2 * maze.height + 1
    cols = 4 * maze.width + 1
    canvas = [[" "] * cols for _ in range(rows)]
    for r in range(0, rows, 2):
        for c in range(0, cols, 4):
            canvas[r][c] = "+"

    markers = {}
    for name, pos in (("start", start), ("key", key), ("exit", exit)):
        if pos is not None:
            markers[tuple(pos)] = CELL_STYLES[name]["symbol"]

    for cell in maze:
        walls = _cell_walls(maze, cell.x, cell.y, exit, exit_on_top_wall)
        row = 2 * (maze.height - 1 - cell.y) + 1
        col = 4 * cell.x
        if walls.top:
            canvas[row - 1][col + 1:col + 4] = list("---")
        if walls.bottom:
            canvas[row + 1][col + 1:col + 4] = list("---")
        if walls.left:
            canvas[row][col] = "|"
        if walls.right:
            canvas[row][col + 4] = "|"
        if cell.position in markers:
            canvas[row][col + 2] = markers[cell.position]

    return "\n".join("".join(line) for line in canvas)


def wall_segments(maze: Maze, cell_size: float = 1.0, exit: Optional[Position] = None,
                  exit_on_top_wall: bool = True) -> np.ndarray:
    """墙体线段，形状为 ``(n, 2, 2)`` 的端点数组"""
    segments = []
    for cell in maze:
        x, y = cell.x, cell.y
        walls = _cell_walls(maze, x, y, exit, exit_on_top_wall)
        if walls.top:
            segments.append(((x, y + 1), (x + 1, y + 1)))
        if walls.bottom:
            segments.append(((x, y), (x + 1, y)))
        if walls.left:
            segments.append(((x, y), (x, y + 1)))
        if walls.right:
            segments.append(((x + 1, y), (x + 1, y + 1)))
    return np.array(segments, dtype=float).reshape(-1, 2, 2) * cell_size


def plot_maze(maze: Maze, ax=None, start: Optional[Position] = None, exit: Optional[Position] = None,
              key: Optional[Position] = None, cell_size: float = 1.0, exit_on_top_wall: bool = True):
    """在matplotlib坐标轴上绘制迷宫墙体和特殊格子。

    Args:
        maze: 要绘制的迷宫
        ax: 目标坐标轴，为None时新建一个图
        cell_size: 每个格子的边长

    Returns:
        绘制所用的坐标轴
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(8, 8))

    segments = wall_segments(maze, cell_size, exit, exit_on_top_wall)
    ax.add_collection(LineCollection(segments, colors="black", linewidths=2))

    for name, pos in (("start", start), ("exit", exit), ("key", key)):
        if pos is None:
            continue
        style = CELL_STYLES[name]
        ax.scatter([(pos[0] + 0.5) * cell_size], [(pos[1] + 0.5) * cell_size],
                   c=style["color"], marker=style["marker"], s=style["size"], label=style["label"])

    ax.set_xlim(-0.5 * cell_size, (maze.width + 0.5) * cell_size)
    ax.set_ylim(-0.5 * cell_size, (maze.height + 0.5) * cell_size)
    ax.set_aspect("equal")
    ax.set_title(f"{maze.width}x{maze.height} maze")
    if start is not None or exit is not None or key is not None:
        ax.legend(loc="upper right")
    return ax


def _load(path: Path) -> Optional[MazeLayout]:
    if not Path(path).exists():
        print(f"错误：找不到文件 {path}")
        print("请先运行 python3 generator.py 生成迷宫")
        return None
    return load_maze_layout(path)


def render_ascii_maze(path: Path = LAYOUT_PATH) -> int:
    """以ASCII字符画打印导出的布局。

    Returns:
        0 表示成功，其他值表示错误
    """
    try:
        layout = _load(path)
    except MazeError as e:
        print(f"错误：{e}")
        return 1
    if layout is None:
        return 1

    print(f"\n=== {layout.maze.width}x{layout.maze.height} 迷宫，种子 {layout.seed} ===")
    print(render_ascii(layout.maze, layout.start, layout.exit, layout.key, layout.exit_on_top_wall))
    return 0


def render_plot_maze(path: Path = LAYOUT_PATH, show: bool = True) -> int:
    """用matplotlib绘制导出的布局。

    Returns:
        0 表示成功，其他值表示错误
    """
    try:
        layout = _load(path)
    except MazeError as e:
        print(f"错误：{e}")
        return 1
    if layout is None:
        return 1

    plot_maze(layout.maze, start=layout.start, exit=layout.exit, key=layout.key,
              cell_size=layout.cell_size, exit_on_top_wall=layout.exit_on_top_wall)
    plt.tight_layout()
    if show:
        plt.show()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """渲染导出的布局：1 = 绘图，2 = ASCII，3 = 两者都要。

    Returns:
        0 表示成功，其他值表示错误
    """
    if argv is None:
        argv = sys.argv[1:]

    if argv:
        choice = argv[0]
    elif sys.stdin.isatty():
        print("=== 迷宫渲染器 ===")
        print("1. matplotlib 绘图（默认）")
        print("2. ASCII 俯视图")
        print("3. 两者都显示")
        try:
            choice = input("请选择视图 (1/2/3): ").strip() or "1"
        except (KeyboardInterrupt, EOFError):
            print("\n使用绘图视图")
            choice = "1"
    else:
        choice = "2"

    path = Path(argv[1]) if len(argv) > 1 else LAYOUT_PATH

    if choice == "1":
        return render_plot_maze(path)
    if choice == "2":
        return render_ascii_maze(path)
    if choice == "3":
        return max(render_ascii_maze(path), render_plot_maze(path))
    print(f"未知选项 {choice!r}，应为 1、2 或 3")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
