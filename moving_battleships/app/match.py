"""Match orchestration: turn flow, buffered move plans and status history."""

from __future__ import annotations

import logging

from moving_battleships.ai.factory import build_admiral
from moving_battleships.ai.random_admiral import RandomAdmiral
from moving_battleships.ai.strategy import AdmiralStrategy
from moving_battleships.app import phase_flow
from moving_battleships.core.firing import next_firing_player, resolve_salvo
from moving_battleships.core.models import (
    Coord,
    GameMode,
    MoveOrder,
    MoveResolution,
    Orientation,
    Phase,
    PlayerId,
    ShotResult,
)
from moving_battleships.core.movement import can_move_ship, plan_movement, resolve_movement
from moving_battleships.core.placement import all_ships_placed, place_ship
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.state import (
    GameState,
    create_initial_state,
    owner_of_uid,
    validate_player_id,
)
from moving_battleships.infra.config import GameConfig

logger = logging.getLogger(__name__)

DEFAULT_SEED = 90210
DEFAULT_AI_MOVE_RETRIES = 6


class Match:
    """Drives one game from placement to game over.

    The match exclusively owns its ``GameState`` for the duration of each call.
    Illegal requests return ``False``/``None`` and leave the state untouched.
    """

    def __init__(
        self,
        mode: GameMode | str,
        *,
        seed: int = DEFAULT_SEED,
        admiral: AdmiralStrategy | None = None,
        clear_misses_each_round: bool = True,
        ai_move_retries: int = DEFAULT_AI_MOVE_RETRIES,
    ) -> None:
        self.state: GameState = create_initial_state(
            mode, clear_misses_each_round=clear_misses_each_round
        )
        self.rng = SeededRng(seed)
        self.admiral = admiral
        if self.admiral is None and self.state.mode is GameMode.ONE_PLAYER:
            self.admiral = RandomAdmiral(self.rng)
        self.ai_move_retries = max(1, ai_move_retries)
        self.pending_orders: tuple[dict[str, MoveOrder], dict[str, MoveOrder]] = ({}, {})
        self.last_resolution: MoveResolution | None = None
        self.status = "Place your fleet."
        self.history: list[str] = []

    @classmethod
    def from_config(cls, config: GameConfig, *, mode: GameMode | str | None = None) -> Match:
        """Build a match from environment settings."""
        resolved = GameMode(mode) if mode is not None else config.mode
        admiral = None
        if resolved is GameMode.ONE_PLAYER:
            admiral = build_admiral(config.ai_difficulty, SeededRng(config.seed))
        return cls(
            resolved,
            seed=config.seed,
            admiral=admiral,
            clear_misses_each_round=config.clear_misses_each_round,
            ai_move_retries=config.ai_move_retries,
        )

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def mode(self) -> GameMode:
        return self.state.mode

    def current_player(self) -> PlayerId | None:
        """Player whose turn the phase label names."""
        return self.state.phase.player

    # Placement

    def place(self, player_id: int, uid: str, anchor: Coord, orientation: Orientation) -> bool:
        pid = validate_player_id(player_id)
        if not self._is_placing(pid):
            return False
        return place_ship(self.state.players[pid], uid, anchor, orientation)

    def auto_place(self, player_id: int) -> bool:
        """Randomly place the whole fleet of ``player_id``."""
        pid = validate_player_id(player_id)
        if not self._is_placing(pid):
            return False
        return self._placement_admiral().place_fleet(self.state.players[pid])

    def finish_placement(self, player_id: int) -> bool:
        pid = validate_player_id(player_id)
        player = self.state.players[pid]
        if not self._is_placing(pid) or not all_ships_placed(player):
            return False

        if self.mode is GameMode.ONE_PLAYER:
            opponent = self.state.players[1]
            if not self._placement_admiral().place_fleet(opponent):
                placed = sum(ship.placed for ship in opponent.ships)
                logger.warning("ai_fleet_incomplete placed=%d", placed)
        self._transition(phase_flow.PLACEMENT_DONE)
        if self.phase.is_firing:
            self._set_status(f"Fleets deployed. Begin firing round {self.state.round}.")
        else:
            self._set_status(f"{player.name} deployed. {self.state.players[1].name} to place.")
        return True

    # Firing

    def fire(
        self, player_id: int, ship_uid: str, target: Coord, orientation: Orientation
    ) -> list[ShotResult] | None:
        """Fire one ship's salvo if it is ``player_id``'s firing turn."""
        pid = validate_player_id(player_id)
        if not self.phase.is_firing or self.current_player() != pid:
            return None
        results = resolve_salvo(self.state, pid, ship_uid, target, orientation)
        if results is None:
            self.status = "Invalid shot."
            return None

        hits = sum(1 for result in results if result.hit)
        logger.info(
            "salvo_resolved round=%d attacker=%d ship=%s target=%d,%d hits=%d/%d",
            self.state.round,
            pid,
            ship_uid,
            target.x,
            target.y,
            hits,
            len(results),
        )
        self._set_status(f"Salvo: {hits}/{len(results)} hits." if hits else "Salvo missed.")
        for result in results:
            if result.sunk_ship_uid is not None:
                self._set_status(f"{self.state.players[pid].name} sank {result.sunk_ship_uid}.")

        if self.state.winner is not None:
            self._finish_game(self.state.winner)
            return results

        shooter = next_firing_player(self.state, pid)
        if shooter is None:
            self._clear_pending()
            self._transition(phase_flow.FIRING_DONE)
            self._set_status(f"Firing round {self.state.round} complete. Plan movement.")
        else:
            self._transition(phase_flow.NEXT_SHOOTER, payload=shooter)
        return results

    # Movement

    def submit_order(self, player_id: int, order: MoveOrder) -> bool:
        """Buffer one order; resolves once both plans are complete."""
        pid = validate_player_id(player_id)
        if not self.phase.is_movement or self.current_player() != pid:
            return False
        if not can_move_ship(self.state, pid, order):
            return False
        self.pending_orders[pid][order.ship_uid] = order
        self._advance_movement(pid)
        return True

    def plan_complete(self, player_id: int) -> bool:
        pid = validate_player_id(player_id)
        needed = {ship.uid for ship in self.state.players[pid].active_ships()}
        return needed <= self.pending_orders[pid].keys()

    def _advance_movement(self, pid: PlayerId) -> None:
        if not self.plan_complete(pid):
            return
        if pid == 0:
            self._transition(phase_flow.PLAN_DONE)
            self._set_status(f"{self.state.players[0].name} movement planned.")
            return
        self._resolve_round()

    def _resolve_round(self) -> None:
        orders_p1 = list(self.pending_orders[0].values())
        orders_p2 = list(self.pending_orders[1].values())
        finished_round = self.state.round
        self._transition(phase_flow.MOVEMENT_RESOLVED)
        resolution = resolve_movement(self.state, orders_p1, orders_p2)
        self.last_resolution = resolution
        self._clear_pending()
        logger.info(
            "movement_resolved round=%d applied=%d rejected=%s",
            finished_round,
            len(resolution.applied),
            ",".join(resolution.rejected) or "-",
        )
        if resolution.rejected:
            self._set_status(f"Rejected moves: {', '.join(resolution.rejected)}")
        else:
            self._set_status("Movement resolved.")

    # AI

    def run_ai_turn(self) -> bool:
        """Let the single-player opponent act if it is its turn."""
        if self.mode is not GameMode.ONE_PLAYER or self.admiral is None:
            return False
        if self.phase is Phase.FIRING_P2:
            order = self.admiral.choose_salvo(self.state, 1)
            if order is None:
                return False
            return self.fire(1, order.ship_uid, order.target, order.orientation) is not None
        if self.phase is Phase.MOVEMENT_P2:
            self._submit_ai_plan(self.admiral)
            return True
        return False

    def _submit_ai_plan(self, admiral: AdmiralStrategy) -> None:
        human_orders = list(self.pending_orders[0].values())
        plan = admiral.plan_moves(self.state, 1)
        for attempt in range(1, self.ai_move_retries):
            dry_run = plan_movement(self.state, human_orders, plan)
            if not any(owner_of_uid(uid) == 1 for uid in dry_run.rejected):
                break
            logger.debug("ai_move_plan_resampled attempt=%d", attempt)
            plan = admiral.plan_moves(self.state, 1)
        for order in plan:
            self.pending_orders[1][order.ship_uid] = order
        self._advance_movement(1)

    # Internals

    def _is_placing(self, pid: PlayerId) -> bool:
        return self.phase.is_placement and self.current_player() == pid

    def _placement_admiral(self) -> AdmiralStrategy:
        if self.admiral is not None:
            return self.admiral
        return RandomAdmiral(self.rng)

    def _finish_game(self, winner: PlayerId) -> None:
        self._transition(phase_flow.VICTORY)
        logger.info("game_over round=%d winner=%d", self.state.round, winner)
        self._set_status(f"{self.state.players[winner].name} wins.")

    def _clear_pending(self) -> None:
        for orders in self.pending_orders:
            orders.clear()

    def _transition(self, trigger: str, *, payload: object | None = None) -> None:
        current = self.state.phase
        if current is Phase.GAME_OVER and trigger == phase_flow.VICTORY:
            return
        target = phase_flow.resolve_phase(self.mode, current, trigger, payload=payload)
        if target is None:
            raise RuntimeError(f"no transition for {trigger!r} from {current}")
        self.state.phase = target
        if target is not current:
            logger.debug("phase_transition trigger=%s from=%s to=%s", trigger, current, target)

    def _set_status(self, message: str) -> None:
        self.status = message
        self.history.append(message)
