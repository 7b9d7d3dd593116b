"""AI admiral interface and selection."""

from __future__ import annotations

from abc import ABC, abstractmethod

from moving_battleships.core.models import MoveOrder, PlayerId, SalvoOrder
from moving_battleships.core.state import GameState, PlayerState


class AdmiralStrategy(ABC):
    """Decision-making contract for a computer-controlled fleet.

    Strategies only propose actions; the orchestrator still runs them through
    the regular legality checks.
    """

    @abstractmethod
    def place_fleet(self, player: PlayerState) -> bool:
        """Place every ship of ``player``. Returns whether the fleet is complete."""

    @abstractmethod
    def choose_salvo(self, state: GameState, player_id: PlayerId) -> SalvoOrder | None:
        """Return the next salvo, or ``None`` when no ship can fire."""

    @abstractmethod
    def plan_moves(self, state: GameState, player_id: PlayerId) -> list[MoveOrder]:
        """Return one order per live ship."""
