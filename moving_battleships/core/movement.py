"""Movement legality and simultaneous two-sided resolution."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from moving_battleships.core.grid import OccupancyGrid, l_path, manhattan
from moving_battleships.core.models import (
    Coord,
    MoveOrder,
    MoveResolution,
    Orientation,
    PlayerId,
)
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.rules import begin_next_round
from moving_battleships.core.state import GameState, find_ship, occupancy, owner_of_uid


@dataclass(slots=True)
class MovementPlan:
    """Dry-run outcome of a resolution pass. Nothing here is committed yet."""

    tentative: dict[str, tuple[Coord, Orientation]] = field(default_factory=dict)
    applied: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)

    def resolution(self) -> MoveResolution:
        rejected = set(self.rejected)
        applied = [uid for uid in self.applied if uid not in rejected]
        return MoveResolution(
            applied=tuple(dict.fromkeys(applied)),
            rejected=tuple(dict.fromkeys(self.rejected)),
        )


def can_move_ship(state: GameState, player_id: PlayerId, order: MoveOrder) -> bool:
    """Check range, the x-then-y path and the destination footprint.

    The path is swept with the ship's current orientation; only the final
    footprint uses the requested one. Every other placed, unsunk ship of
    either side is an obstacle.
    """
    ship = state.players[player_id].ship(order.ship_uid)
    if ship is None or not ship.is_active:
        return False
    if order.skip:
        return True
    if manhattan(ship.anchor, order.to) > ship.template.move:
        return False

    obstacles = occupancy(state.all_ships(), ignore_uid=ship.uid)
    for anchor in l_path(ship.anchor, order.to):
        if obstacles.is_blocked(ship.cells_at(anchor)):
            return False
    return not obstacles.is_blocked(ship.cells_at(order.to, order.orientation))


def plan_movement(
    state: GameState, orders_p1: Iterable[MoveOrder], orders_p2: Iterable[MoveOrder]
) -> MovementPlan:
    """Validate every order, then reject every ship whose end footprint collides."""
    plan = MovementPlan()
    for order in [*orders_p1, *orders_p2]:
        ship = find_ship(state, order.ship_uid)
        owner = owner_of_uid(order.ship_uid)
        if ship is None or owner is None or not ship.is_active:
            plan.rejected.append(order.ship_uid)
            continue
        if order.skip:
            plan.applied.append(ship.uid)
            continue
        if not can_move_ship(state, owner, order):
            plan.rejected.append(ship.uid)
            continue
        plan.tentative[ship.uid] = (order.to, order.orientation)
        plan.applied.append(ship.uid)

    end_positions = OccupancyGrid()
    for ship in state.all_ships():
        if not ship.is_active:
            continue
        anchor, orientation = plan.tentative.get(ship.uid, (ship.anchor, ship.orientation))
        clashes = end_positions.stamp(ship.uid, ship.cells_at(anchor, orientation))
        if not clashes:
            continue
        # Collisions are symmetric: every party to a shared cell stays put.
        for uid in (*clashes, ship.uid):
            if uid not in plan.rejected:
                plan.rejected.append(uid)
    return plan


def resolve_movement(
    state: GameState, orders_p1: Iterable[MoveOrder], orders_p2: Iterable[MoveOrder]
) -> MoveResolution:
    """Apply both players' plans at once and start the next round.

    Rejected ships keep their pre-move anchor and orientation.
    """
    plan = plan_movement(state, orders_p1, orders_p2)
    rejected = set(plan.rejected)
    for ship in state.all_ships():
        if ship.uid in rejected or ship.uid not in plan.tentative:
            continue
        ship.anchor, ship.orientation = plan.tentative[ship.uid]
    begin_next_round(state)
    return plan.resolution()


def candidate_orders(state: GameState, player_id: PlayerId, uid: str) -> list[MoveOrder]:
    """Skip plus every anchor in the move diamond, in both orientations."""
    ship = state.players[player_id].ship(uid)
    if ship is None or not ship.is_active:
        return []
    reach = ship.template.move
    candidates = [MoveOrder(ship.uid, ship.anchor, ship.orientation, skip=True)]
    for dx in range(-reach, reach + 1):
        for dy in range(-reach, reach + 1):
            if abs(dx) + abs(dy) > reach:
                continue
            to = Coord(ship.anchor.x + dx, ship.anchor.y + dy)
            for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
                candidates.append(MoveOrder(ship.uid, to, orientation))
    return candidates


def legal_orders(state: GameState, player_id: PlayerId, uid: str) -> list[MoveOrder]:
    return [
        order
        for order in candidate_orders(state, player_id, uid)
        if can_move_ship(state, player_id, order)
    ]


def random_move_plan(state: GameState, player_id: PlayerId, rng: SeededRng) -> list[MoveOrder]:
    """Pick one legal order per live ship, uniformly among the candidates."""
    orders: list[MoveOrder] = []
    for ship in state.players[player_id].active_ships():
        orders.append(rng.choice(legal_orders(state, player_id, ship.uid)))
    return orders
