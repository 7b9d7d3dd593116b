"""Read-only board snapshots for renderers and hover previews."""

from __future__ import annotations

from dataclasses import dataclass

from moving_battleships.core.firing import can_ship_fire, compute_salvo_targets
from moving_battleships.core.models import (
    Coord,
    ImpactMarker,
    MoveOrder,
    Orientation,
    Phase,
    PlayerId,
    ShipTypeId,
)
from moving_battleships.core.movement import can_move_ship
from moving_battleships.core.state import GameState, ShipInstance


@dataclass(frozen=True, slots=True)
class ShipView:
    """Drawable state of one of the viewer's own ships."""

    uid: str
    type_id: ShipTypeId
    name: str
    anchor: Coord
    orientation: Orientation
    cells: tuple[Coord, ...]
    damaged_cells: tuple[Coord, ...]
    placed: bool
    sunk: bool
    fired_this_round: bool


@dataclass(frozen=True, slots=True)
class BoardView:
    """Everything one player is allowed to see."""

    viewer: PlayerId
    phase: Phase
    round: int
    winner: PlayerId | None
    own_ships: tuple[ShipView, ...]
    target_misses: frozenset[Coord]
    target_ephemeral_hits: frozenset[Coord]
    impact_markers: tuple[ImpactMarker, ...]
    destroyed_enemy_ship_uids: tuple[str, ...]
    is_viewer_turn: bool


def _ship_view(state: GameState, ship: ShipInstance) -> ShipView:
    return ShipView(
        uid=ship.uid,
        type_id=ship.type_id,
        name=ship.template.name,
        anchor=ship.anchor,
        orientation=ship.orientation,
        cells=tuple(ship.cells()) if ship.placed else (),
        damaged_cells=tuple(ship.damaged_cells()) if ship.placed else (),
        placed=ship.placed,
        sunk=ship.sunk,
        fired_this_round=ship.uid in state.fired_this_round[ship.owner],
    )


def build_board_view(state: GameState, viewer: PlayerId) -> BoardView:
    """Snapshot ``viewer``'s fleet and targeting view. Enemy positions never leak."""
    player = state.players[viewer]
    return BoardView(
        viewer=viewer,
        phase=state.phase,
        round=state.round,
        winner=state.winner,
        own_ships=tuple(_ship_view(state, ship) for ship in player.ships),
        target_misses=frozenset(player.misses),
        target_ephemeral_hits=frozenset(player.ephemeral_hits),
        impact_markers=tuple(player.ephemeral_impact_markers),
        destroyed_enemy_ship_uids=tuple(player.destroyed_enemy_ship_uids),
        is_viewer_turn=state.phase.player == viewer,
    )


def salvo_preview(
    state: GameState, viewer: PlayerId, ship_uid: str, target: Coord, orientation: Orientation
) -> list[Coord]:
    """Cells the selected ship's salvo would cover; empty when it cannot fire."""
    if not state.phase.is_firing or not can_ship_fire(state, viewer, ship_uid):
        return []
    ship = state.players[viewer].ship(ship_uid)
    if ship is None:
        return []
    return compute_salvo_targets(target, orientation, ship.template.gun_count)


def movement_preview_valid(
    state: GameState, viewer: PlayerId, ship_uid: str, to: Coord, orientation: Orientation
) -> bool | None:
    """Legality of a hovered destination, ``None`` outside the movement phase."""
    if not state.phase.is_movement:
        return None
    order = MoveOrder(ship_uid=ship_uid, to=to, orientation=orientation)
    return can_move_ship(state, viewer, order)
