"""Easy AI: uniformly random legal play."""

from __future__ import annotations

from moving_battleships.ai.strategy import AdmiralStrategy
from moving_battleships.core.firing import random_legal_shot
from moving_battleships.core.models import MoveOrder, PlayerId, SalvoOrder
from moving_battleships.core.movement import random_move_plan
from moving_battleships.core.placement import PLACEMENT_ATTEMPTS, random_fleet_placement
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.state import GameState, PlayerState


class RandomAdmiral(AdmiralStrategy):
    """Samples placements, salvos and moves from the core helpers."""

    def __init__(self, rng: SeededRng, placement_attempts: int = PLACEMENT_ATTEMPTS) -> None:
        self._rng = rng
        self._placement_attempts = placement_attempts

    def place_fleet(self, player: PlayerState) -> bool:
        return random_fleet_placement(player, self._rng, self._placement_attempts)

    def choose_salvo(self, state: GameState, player_id: PlayerId) -> SalvoOrder | None:
        return random_legal_shot(state, player_id, self._rng)

    def plan_moves(self, state: GameState, player_id: PlayerId) -> list[MoveOrder]:
        return random_move_plan(state, player_id, self._rng)
