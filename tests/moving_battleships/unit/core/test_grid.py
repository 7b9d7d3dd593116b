from __future__ import annotations

from moving_battleships.core.grid import (
    OccupancyGrid,
    cell_key,
    coord_from_key,
    footprint,
    in_bounds,
    l_path,
    manhattan,
)
from moving_battleships.core.models import Coord, Orientation


def test_in_bounds_edges() -> None:
    assert in_bounds(Coord(0, 0))
    assert in_bounds(Coord(9, 9))
    assert not in_bounds(Coord(10, 0))
    assert not in_bounds(Coord(0, -1))


def test_cell_key_is_row_major_and_reversible() -> None:
    assert cell_key(Coord(3, 4)) == 43
    assert coord_from_key(43) == Coord(3, 4)
    assert coord_from_key(cell_key(Coord(9, 0))) == Coord(9, 0)


def test_footprint_extends_right_or_down() -> None:
    assert footprint(Coord(1, 2), Orientation.HORIZONTAL, 3) == [
        Coord(1, 2),
        Coord(2, 2),
        Coord(3, 2),
    ]
    assert footprint(Coord(1, 2), Orientation.VERTICAL, 2) == [Coord(1, 2), Coord(1, 3)]


def test_l_path_walks_x_then_y() -> None:
    assert manhattan(Coord(0, 0), Coord(2, 1)) == 3
    assert l_path(Coord(0, 0), Coord(2, 1)) == [Coord(1, 0), Coord(2, 0), Coord(2, 1)]
    assert l_path(Coord(3, 3), Coord(2, 1)) == [Coord(2, 3), Coord(2, 2), Coord(2, 1)]
    assert l_path(Coord(4, 4), Coord(4, 4)) == []


def test_occupancy_grid_reports_clashes_and_keeps_first_holder() -> None:
    grid = OccupancyGrid()
    assert grid.stamp("a", [Coord(0, 0), Coord(1, 0)]) == []
    assert grid.stamp("b", [Coord(1, 0), Coord(1, 1)]) == ["a"]

    assert grid.owner_at(Coord(1, 0)) == "a"
    assert grid.owner_at(Coord(1, 1)) == "b"
    assert grid.owner_at(Coord(5, 5)) is None
    assert grid.owner_at(Coord(-1, 0)) is None
    assert grid.occupied_count() == 3


def test_occupancy_grid_blocks_off_board_and_occupied_cells() -> None:
    grid = OccupancyGrid.from_footprints([("a", [Coord(2, 2)])])
    assert grid.is_blocked([Coord(2, 2)])
    assert grid.is_blocked([Coord(0, 0), Coord(-1, 0)])
    assert not grid.is_blocked([Coord(3, 2), Coord(3, 3)])
