from __future__ import annotations

import pytest

from moving_battleships.core.models import Coord, GameMode, Orientation, Phase, ShipTypeId
from moving_battleships.core.state import (
    create_initial_state,
    find_ship,
    occupancy,
    owner_of_uid,
    require_ship,
    validate_player_id,
)


def test_initial_state_for_single_player() -> None:
    state = create_initial_state("1p")
    assert state.mode is GameMode.ONE_PLAYER
    assert state.phase is Phase.PLACEMENT_P1
    assert state.round == 1
    assert state.winner is None
    assert [player.name for player in state.players] == ["Player 1", "Easy AI"]
    assert [player.is_ai for player in state.players] == [False, True]
    assert [ship.uid for ship in state.players[1].ships][0] == "1-scout"
    assert not any(ship.placed for ship in state.all_ships())


def test_two_player_state_has_no_ai() -> None:
    state = create_initial_state(GameMode.TWO_PLAYER, clear_misses_each_round=False)
    assert state.players[1].name == "Player 2"
    assert not state.players[1].is_ai
    assert state.clear_misses_each_round is False


def test_uid_lookup() -> None:
    state = create_initial_state(GameMode.TWO_PLAYER)
    assert owner_of_uid("0-cruiser") == 0
    assert owner_of_uid("1-cruiser") == 1
    assert owner_of_uid("2-cruiser") is None
    assert find_ship(state, "1-cruiser") is state.players[1].ship_of_type(ShipTypeId.CRUISER)
    assert find_ship(state, "0-submarine") is None
    with pytest.raises(KeyError):
        require_ship(state, "garbage")


def test_segments_follow_the_ship_when_it_turns() -> None:
    state = create_initial_state(GameMode.TWO_PLAYER)
    ship = state.players[0].ship_of_type(ShipTypeId.DESTROYER)
    ship.anchor = Coord(2, 2)
    ship.placed = True
    ship.hits = {1}
    assert ship.segment_at(Coord(3, 2)) == 1
    assert ship.segment_at(Coord(2, 3)) is None
    assert ship.damaged_cells() == [Coord(3, 2)]

    ship.orientation = Orientation.VERTICAL
    assert ship.damaged_cells() == [Coord(2, 3)]


def test_occupancy_skips_unplaced_and_sunk_ships() -> None:
    state = create_initial_state(GameMode.TWO_PLAYER)
    scout, destroyer = state.players[0].ships[:2]
    scout.placed = True
    destroyer.placed = True
    destroyer.anchor = Coord(0, 1)
    destroyer.sunk = True

    grid = occupancy(state.all_ships())
    assert grid.owner_at(Coord(0, 0)) == scout.uid
    assert grid.owner_at(Coord(0, 1)) is None
    assert occupancy(state.all_ships(), ignore_uid=scout.uid).occupied_count() == 0


def test_validate_player_id() -> None:
    assert validate_player_id(1) == 1
    with pytest.raises(ValueError):
        validate_player_id(2)
