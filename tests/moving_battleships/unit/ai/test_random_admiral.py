from __future__ import annotations

import logging

from moving_battleships.ai.factory import build_admiral
from moving_battleships.ai.random_admiral import RandomAdmiral
from moving_battleships.core.firing import can_ship_fire
from moving_battleships.core.movement import can_move_ship
from moving_battleships.core.placement import all_ships_placed
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.state import GameState


def test_admiral_places_full_fleet(state: GameState, seeded_rng: SeededRng) -> None:
    admiral = RandomAdmiral(seeded_rng)
    assert admiral.place_fleet(state.players[1])
    assert all_ships_placed(state.players[1])


def test_admiral_only_proposes_legal_actions(lined_up_state: GameState) -> None:
    admiral = RandomAdmiral(SeededRng(21))

    salvo = admiral.choose_salvo(lined_up_state, 1)
    assert salvo is not None
    assert can_ship_fire(lined_up_state, 1, salvo.ship_uid)

    moves = admiral.plan_moves(lined_up_state, 1)
    assert len(moves) == 5
    assert all(can_move_ship(lined_up_state, 1, order) for order in moves)


def test_admiral_passes_when_no_ship_can_fire(lined_up_state: GameState) -> None:
    for ship in lined_up_state.players[0].ships:
        lined_up_state.fired_this_round[0].add(ship.uid)
    assert RandomAdmiral(SeededRng(1)).choose_salvo(lined_up_state, 0) is None


def test_factory_falls_back_to_easy(caplog) -> None:
    assert isinstance(build_admiral("easy", SeededRng(1)), RandomAdmiral)
    with caplog.at_level(logging.WARNING, logger="moving_battleships.ai.factory"):
        admiral = build_admiral("Nightmare", SeededRng(1))
    assert isinstance(admiral, RandomAdmiral)
    assert "unknown_ai_difficulty value=Nightmare" in caplog.text
