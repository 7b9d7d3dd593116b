"""Salvo targeting, damage and firing turn order."""

from __future__ import annotations

from moving_battleships.core.grid import in_bounds
from moving_battleships.core.models import (
    BOARD_SIZE,
    BoardSide,
    Coord,
    ImpactMarker,
    Orientation,
    PlayerId,
    SalvoOrder,
    ShotResult,
    opponent,
)
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.rules import check_victory
from moving_battleships.core.state import GameState, PlayerState, ShipInstance

TARGET_RESAMPLE_LIMIT = 100


def compute_salvo_targets(target: Coord, orientation: Orientation, gun_count: int) -> list[Coord]:
    """Return ``gun_count`` contiguous cells centred on ``target``.

    Even counts put the extra shell after the target, so a two-gun salvo at
    (2, 2) lands on (2, 2) and (3, 2).
    """
    start = -((gun_count - 1) // 2)
    if orientation is Orientation.HORIZONTAL:
        return [Coord(target.x + start + i, target.y) for i in range(gun_count)]
    return [Coord(target.x, target.y + start + i) for i in range(gun_count)]


def ship_at(player: PlayerState, target: Coord) -> ShipInstance | None:
    """Return the placed, unsunk ship of ``player`` covering ``target``."""
    for ship in player.ships:
        if ship.is_active and target in ship.cells():
            return ship
    return None


def can_ship_fire(state: GameState, player_id: PlayerId, uid: str) -> bool:
    ship = state.players[player_id].ship(uid)
    if ship is None or not ship.is_active:
        return False
    return uid not in state.fired_this_round[player_id]


def has_unfired_ships(state: GameState, player_id: PlayerId) -> bool:
    return any(can_ship_fire(state, player_id, ship.uid) for ship in state.players[player_id].ships)


def next_firing_player(state: GameState, current: PlayerId) -> PlayerId | None:
    """Hand the turn to the opponent when possible, else let ``current`` continue.

    ``None`` means neither side has an unfired live ship and the firing part of
    the round is over.
    """
    other = opponent(current)
    if has_unfired_ships(state, other):
        return other
    if has_unfired_ships(state, current):
        return current
    return None


def firing_complete(state: GameState) -> bool:
    return not has_unfired_ships(state, 0) and not has_unfired_ships(state, 1)


def _add_marker(player: PlayerState, marker: ImpactMarker) -> None:
    if marker not in player.ephemeral_impact_markers:
        player.ephemeral_impact_markers.append(marker)


def _resolve_shell(
    state: GameState,
    attacker_id: PlayerId,
    ship_uid: str,
    target: Coord,
    struck: ShipInstance | None,
) -> ShotResult:
    defender_id = opponent(attacker_id)
    attacker = state.players[attacker_id]
    defender = state.players[defender_id]

    if not in_bounds(target):
        return ShotResult(attacker_id, defender_id, ship_uid, target, hit=False, damage=0)

    if struck is None:
        attacker.misses.add(target)
        return ShotResult(attacker_id, defender_id, ship_uid, target, hit=False, damage=0)

    segment = struck.segment_at(target)
    damage = 0
    if segment is not None and segment not in struck.hits:
        struck.hits.add(segment)
        damage = 1

    attacker.ephemeral_hits.add(target)
    _add_marker(attacker, ImpactMarker(BoardSide.TARGET, struck.uid, target))
    _add_marker(defender, ImpactMarker(BoardSide.OWN, struck.uid, target))

    sunk_uid = struck.uid if damage and len(struck.hits) >= struck.size else None

    return ShotResult(
        attacker_id,
        defender_id,
        ship_uid,
        target,
        hit=True,
        damage=damage,
        hit_ship_uid=struck.uid,
        sunk_ship_uid=sunk_uid,
    )


def _record_sink(attacker: PlayerState, ship: ShipInstance) -> None:
    ship.sunk = True
    attacker.destroyed_enemy_types.append(ship.type_id)
    if ship.uid not in attacker.destroyed_enemy_ship_uids:
        attacker.destroyed_enemy_ship_uids.append(ship.uid)


def resolve_salvo(
    state: GameState,
    attacker_id: PlayerId,
    ship_uid: str,
    target: Coord,
    orientation: Orientation,
) -> list[ShotResult] | None:
    """Fire every gun of one ship at once.

    Returns one result per shell, or ``None`` without touching the state when
    the game is over, the ship cannot fire this round, or ``target`` is off
    the board. Shells that land off the board are logged as misses.
    """
    ship = state.players[attacker_id].ship(ship_uid)
    if state.winner is not None or ship is None:
        return None
    if not in_bounds(target) or not can_ship_fire(state, attacker_id, ship_uid):
        return None

    defender = state.players[opponent(attacker_id)]
    cells = compute_salvo_targets(target, orientation, ship.template.gun_count)
    # All shells land at once: targets are fixed before any damage is applied.
    struck = [ship_at(defender, cell) if in_bounds(cell) else None for cell in cells]
    results = [
        _resolve_shell(state, attacker_id, ship_uid, cell, hit_ship)
        for cell, hit_ship in zip(cells, struck)
    ]
    for result, hit_ship in zip(results, struck):
        if result.sunk_ship_uid is not None and hit_ship is not None:
            _record_sink(state.players[attacker_id], hit_ship)
    state.shot_log.extend(results)
    state.fired_this_round[attacker_id].add(ship_uid)
    check_victory(state)
    return results


def random_legal_shot(
    state: GameState, attacker_id: PlayerId, rng: SeededRng
) -> SalvoOrder | None:
    """Pick a random ready ship and a target that is not a known miss."""
    attacker = state.players[attacker_id]
    ready = [ship for ship in attacker.ships if can_ship_fire(state, attacker_id, ship.uid)]
    if not ready:
        return None
    ship = rng.choice(ready)
    target = Coord(rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
    for _ in range(TARGET_RESAMPLE_LIMIT):
        if target not in attacker.misses:
            break
        target = Coord(rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
    orientation = Orientation.HORIZONTAL if rng.randrange(2) == 0 else Orientation.VERTICAL
    return SalvoOrder(ship_uid=ship.uid, target=target, orientation=orientation)
