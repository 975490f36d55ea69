"""A* grid pathfinding with path smoothing for the tower defense map."""

from __future__ import annotations

import heapq
import itertools
import math
from dataclasses import dataclass, field
from typing import Container, Sequence

from miniconsole.td_models import Cell

_DIRECTIONS = (Cell(0, -1), Cell(0, 1), Cell(-1, 0), Cell(1, 0))


@dataclass
class PathResult:
    """Outcome of a path search, with the cells opened and closed on the way."""

    found: bool
    path: list[Cell] = field(default_factory=list)
    open: list[Cell] = field(default_factory=list)
    closed: list[Cell] = field(default_factory=list)


def heuristic(a: Cell, b: Cell) -> float:
    """Manhattan distance between two cells."""
    return float(abs(a.x - b.x) + abs(a.y - b.y))


def smooth_path(cells: Sequence[Cell]) -> list[Cell]:
    """Drop the interior cells that continue in the same direction."""
    if len(cells) <= 2:
        return list(cells)
    out = [cells[0]]
    for a, b, c in zip(cells, cells[1:], cells[2:]):
        if (b.x - a.x, b.y - a.y) == (c.x - b.x, c.y - b.y):
            continue
        out.append(b)
    out.append(cells[-1])
    return out


def find_path(
    start: Cell, goal: Cell, cols: int, rows: int, blocked: Container[Cell]
) -> PathResult:
    """Search a 4-connected grid from start to goal, avoiding blocked cells.

    The returned path is smoothed to its turning points; it is empty when
    the goal cannot be reached.
    """
    best_g: dict[Cell, float] = {start: 0.0}
    closed: set[Cell] = set()
    parents: dict[Cell, Cell] = {}
    open_order: list[Cell] = []
    closed_order: list[Cell] = []

    counter = itertools.count()
    heap: list[tuple[float, int, float, Cell, Cell | None]] = [
        (heuristic(start, goal), next(counter), 0.0, start, None)
    ]

    found = False
    while heap:
        _, _, g, cell, parent = heapq.heappop(heap)
        if cell in closed:
            continue
        closed.add(cell)
        closed_order.append(cell)
        if parent is not None:
            parents[cell] = parent
        if cell == goal:
            found = True
            break
        for d in _DIRECTIONS:
            n = Cell(cell.x + d.x, cell.y + d.y)
            if not (0 <= n.x < cols and 0 <= n.y < rows) or n in blocked:
                continue
            if n in closed:
                continue
            new_g = g + 1.0
            if new_g >= best_g.get(n, math.inf):
                continue
            best_g[n] = new_g
            heapq.heappush(
                heap, (new_g + heuristic(n, goal), next(counter), new_g, n, cell)
            )
            open_order.append(n)

    if not found:
        return PathResult(found=False, open=open_order, closed=closed_order)

    route = [goal]
    while route[-1] in parents:
        route.append(parents[route[-1]])
    route.reverse()
    return PathResult(
        found=True, path=smooth_path(route), open=open_order, closed=closed_order
    )