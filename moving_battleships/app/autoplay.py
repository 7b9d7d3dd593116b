"""Headless match driver where admirals play both sides."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from moving_battleships.ai.strategy import AdmiralStrategy
from moving_battleships.app.match import Match
from moving_battleships.core.models import GameMode, Phase, PlayerId

logger = logging.getLogger(__name__)

DEFAULT_MAX_ROUNDS = 200


@dataclass(frozen=True, slots=True)
class AutoplayResult:
    """Outcome of an automated match."""

    winner: PlayerId | None
    rounds: int
    shots: int
    completed: bool


def play_out(
    match: Match,
    admirals: tuple[AdmiralStrategy, AdmiralStrategy],
    *,
    max_rounds: int = DEFAULT_MAX_ROUNDS,
) -> AutoplayResult:
    """Drive a two-player match to game over or until ``max_rounds`` pass."""
    if match.mode is not GameMode.TWO_PLAYER:
        raise ValueError("autoplay drives both sides and needs a two-player match")

    state = match.state
    for pid in (0, 1):
        if not admirals[pid].place_fleet(state.players[pid]) or not match.finish_placement(pid):
            logger.warning("autoplay_placement_failed player=%d", pid)
            return AutoplayResult(None, state.round, len(state.shot_log), completed=False)

    while state.phase is not Phase.GAME_OVER and state.round <= max_rounds:
        pid = match.current_player()
        if pid is None:
            raise RuntimeError(f"no player to act in phase {state.phase}")
        if state.phase.is_firing:
            order = admirals[pid].choose_salvo(state, pid)
            fired = None
            if order is not None:
                fired = match.fire(pid, order.ship_uid, order.target, order.orientation)
            if fired is None:
                raise RuntimeError(f"admiral {pid} produced no legal salvo")
        else:
            for move in admirals[pid].plan_moves(state, pid):
                match.submit_order(pid, move)
            if state.phase.is_movement and match.current_player() == pid:
                raise RuntimeError(f"admiral {pid} left its movement plan incomplete")

    completed = state.phase is Phase.GAME_OVER
    logger.info(
        "autoplay_finished winner=%s rounds=%d shots=%d",
        state.winner,
        state.round,
        len(state.shot_log),
    )
    return AutoplayResult(state.winner, state.round, len(state.shot_log), completed=completed)
