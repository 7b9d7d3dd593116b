"""Board geometry helpers and numpy-backed occupancy lookups."""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from moving_battleships.core.models import BOARD_SIZE, Coord, Orientation


def in_bounds(coord: Coord, size: int = BOARD_SIZE) -> bool:
    """Return whether the coordinate is on the board."""
    return 0 <= coord.x < size and 0 <= coord.y < size


def cell_key(coord: Coord, size: int = BOARD_SIZE) -> int:
    """Flattened cell index, row-major."""
    return coord.y * size + coord.x


def coord_from_key(key: int, size: int = BOARD_SIZE) -> Coord:
    y, x = divmod(key, size)
    return Coord(x, y)


def manhattan(a: Coord, b: Coord) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def footprint(anchor: Coord, orientation: Orientation, size: int) -> list[Coord]:
    """Cells covered by ``size`` segments starting at ``anchor``."""
    if orientation is Orientation.HORIZONTAL:
        return [Coord(anchor.x + i, anchor.y) for i in range(size)]
    return [Coord(anchor.x, anchor.y + i) for i in range(size)]


def l_path(start: Coord, end: Coord) -> list[Coord]:
    """Anchors visited walking x first, then y. Excludes ``start``."""
    path: list[Coord] = []
    x, y = start.x, start.y
    while x != end.x:
        x += 1 if end.x > x else -1
        path.append(Coord(x, y))
    while y != end.y:
        y += 1 if end.y > y else -1
        path.append(Coord(x, y))
    return path


class OccupancyGrid:
    """Cell -> ship uid lookup backed by an ``int16`` array indexed ``[y, x]``.

    Slot 0 is empty water; slot ``n`` refers to ``uids[n - 1]``.
    """

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.size = size
        self.cells = np.zeros((size, size), dtype=np.int16)
        self.uids: list[str] = []

    @classmethod
    def from_footprints(
        cls, footprints: Iterable[tuple[str, list[Coord]]], size: int = BOARD_SIZE
    ) -> OccupancyGrid:
        grid = cls(size)
        for uid, cells in footprints:
            grid.stamp(uid, cells)
        return grid

    def stamp(self, uid: str, cells: list[Coord]) -> list[str]:
        """Mark cells as held by ``uid``; return uids already holding any of them.

        Contested cells keep their first holder. Out-of-bounds cells are ignored.
        """
        self.uids.append(uid)
        slot = len(self.uids)
        clashes: list[str] = []
        for cell in cells:
            if not in_bounds(cell, self.size):
                continue
            current = int(self.cells[cell.y, cell.x])
            if current == 0:
                self.cells[cell.y, cell.x] = slot
                continue
            holder = self.uids[current - 1]
            if holder != uid and holder not in clashes:
                clashes.append(holder)
        return clashes

    def owner_at(self, coord: Coord) -> str | None:
        if not in_bounds(coord, self.size):
            return None
        slot = int(self.cells[coord.y, coord.x])
        return self.uids[slot - 1] if slot else None

    def is_blocked(self, cells: Iterable[Coord]) -> bool:
        """Return whether any cell is off the board or already occupied."""
        for cell in cells:
            if not in_bounds(cell, self.size):
                return True
            if self.cells[cell.y, cell.x] != 0:
                return True
        return False

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.cells))
