from __future__ import annotations

from collections.abc import Callable
from typing import TypeAlias

import pytest

from moving_battleships.core.models import Coord, GameMode, Orientation, ShipTypeId
from moving_battleships.core.placement import place_ship
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.state import GameState, ShipInstance, create_initial_state

PlaceFn: TypeAlias = Callable[..., ShipInstance]


def place_lined_up_fleets(state: GameState) -> None:
    """Fleet 0 along rows 0-4, fleet 1 along rows 5-9, all anchored at x=0."""
    for pid, first_row in ((0, 0), (1, 5)):
        player = state.players[pid]
        for row, ship in enumerate(player.ships):
            assert place_ship(player, ship.uid, Coord(0, first_row + row), Orientation.HORIZONTAL)


@pytest.fixture
def state() -> GameState:
    return create_initial_state(GameMode.TWO_PLAYER)


@pytest.fixture
def lined_up_state(state: GameState) -> GameState:
    place_lined_up_fleets(state)
    return state


@pytest.fixture
def seeded_rng() -> SeededRng:
    return SeededRng(1337)


@pytest.fixture
def place(state: GameState) -> PlaceFn:
    def _place(
        player_id: int,
        type_id: ShipTypeId,
        x: int,
        y: int,
        orientation: Orientation = Orientation.HORIZONTAL,
    ) -> ShipInstance:
        player = state.players[player_id]
        ship = player.ship_of_type(type_id)
        assert place_ship(player, ship.uid, Coord(x, y), orientation)
        return ship

    return _place


@pytest.fixture
def sink_all_but(state: GameState) -> Callable[[int, ShipTypeId], None]:
    def _sink(player_id: int, survivor: ShipTypeId) -> None:
        for ship in state.players[player_id].ships:
            if ship.type_id is not survivor:
                ship.hits = set(range(ship.size))
                ship.sunk = True

    return _sink
