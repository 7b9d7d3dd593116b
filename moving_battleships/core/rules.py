"""Victory detection and round housekeeping."""

from __future__ import annotations

from moving_battleships.core.models import Phase, PlayerId
from moving_battleships.core.state import GameState


def has_winner(state: GameState) -> PlayerId | None:
    """Return the sole side with a ship afloat, or ``None``."""
    alive_0 = state.players[0].has_afloat_ship()
    alive_1 = state.players[1].has_afloat_ship()
    if alive_0 and not alive_1:
        return 0
    if alive_1 and not alive_0:
        return 1
    return None


def check_victory(state: GameState) -> PlayerId | None:
    """Record a winner and end the game if one side has been wiped out."""
    if state.winner is not None:
        return state.winner
    winner = has_winner(state)
    if winner is not None:
        state.winner = winner
        state.phase = Phase.GAME_OVER
    return winner


def reset_firing_round(state: GameState) -> None:
    for fired in state.fired_this_round:
        fired.clear()


def clear_ephemeral(state: GameState) -> None:
    """Drop hit cells and impact markers that are only shown for one round."""
    for player in state.players:
        player.ephemeral_hits.clear()
        player.ephemeral_impact_markers.clear()


def begin_next_round(state: GameState) -> None:
    """Close the current round and reopen firing."""
    clear_ephemeral(state)
    if state.clear_misses_each_round:
        for player in state.players:
            player.misses.clear()
    state.round += 1
    reset_firing_round(state)
    if state.phase is not Phase.GAME_OVER:
        state.phase = Phase.FIRING_P1
