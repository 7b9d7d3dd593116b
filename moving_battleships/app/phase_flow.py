"""Phase transition table for the match orchestrator."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeAlias

from moving_battleships.core.models import GameMode, Phase


@dataclass(frozen=True, slots=True)
class PhaseContext:
    """Transition evaluation context."""

    mode: GameMode
    trigger: str
    source: Phase
    target: Phase
    payload: object | None = None


PhaseGuard: TypeAlias = Callable[[PhaseContext], bool]


@dataclass(frozen=True, slots=True)
class PhaseTransition:
    """One row of the table. ``source=None`` matches any phase."""

    trigger: str
    source: Phase | None
    target: Phase
    guard: PhaseGuard | None = None


def _one_player(context: PhaseContext) -> bool:
    return context.mode is GameMode.ONE_PLAYER


def _two_player(context: PhaseContext) -> bool:
    return context.mode is GameMode.TWO_PLAYER


def _shooter(player_id: int) -> PhaseGuard:
    def guard(context: PhaseContext) -> bool:
        return context.payload == player_id

    return guard


PLACEMENT_DONE = "placement_done"
NEXT_SHOOTER = "next_shooter"
FIRING_DONE = "firing_done"
PLAN_DONE = "plan_done"
MOVEMENT_RESOLVED = "movement_resolved"
VICTORY = "victory"

TRANSITIONS: tuple[PhaseTransition, ...] = (
    PhaseTransition(PLACEMENT_DONE, Phase.PLACEMENT_P1, Phase.PLACEMENT_P2, _two_player),
    PhaseTransition(PLACEMENT_DONE, Phase.PLACEMENT_P1, Phase.FIRING_P1, _one_player),
    PhaseTransition(PLACEMENT_DONE, Phase.PLACEMENT_P2, Phase.FIRING_P1),
    PhaseTransition(NEXT_SHOOTER, Phase.FIRING_P1, Phase.FIRING_P1, _shooter(0)),
    PhaseTransition(NEXT_SHOOTER, Phase.FIRING_P1, Phase.FIRING_P2, _shooter(1)),
    PhaseTransition(NEXT_SHOOTER, Phase.FIRING_P2, Phase.FIRING_P1, _shooter(0)),
    PhaseTransition(NEXT_SHOOTER, Phase.FIRING_P2, Phase.FIRING_P2, _shooter(1)),
    PhaseTransition(FIRING_DONE, Phase.FIRING_P1, Phase.MOVEMENT_P1),
    PhaseTransition(FIRING_DONE, Phase.FIRING_P2, Phase.MOVEMENT_P1),
    PhaseTransition(PLAN_DONE, Phase.MOVEMENT_P1, Phase.MOVEMENT_P2),
    PhaseTransition(MOVEMENT_RESOLVED, Phase.MOVEMENT_P2, Phase.FIRING_P1),
    PhaseTransition(VICTORY, None, Phase.GAME_OVER),
)


def resolve_phase(
    mode: GameMode, current: Phase, trigger: str, *, payload: object | None = None
) -> Phase | None:
    """Return the phase ``trigger`` leads to from ``current``, or ``None``."""
    if current is Phase.GAME_OVER:
        return None
    for transition in TRANSITIONS:
        if transition.trigger != trigger:
            continue
        if transition.source is not None and transition.source is not current:
            continue
        context = PhaseContext(
            mode=mode, trigger=trigger, source=current, target=transition.target, payload=payload
        )
        if transition.guard is not None and not transition.guard(context):
            continue
        return transition.target
    return None
