"""Mutable game state aggregate.

The ``GameState`` is the single object threaded through every rule call.
Rule functions mutate it in place and never keep a copy.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from moving_battleships.core.catalog import SHIPS, template_for
from moving_battleships.core.grid import OccupancyGrid, footprint
from moving_battleships.core.models import (
    PLAYER_IDS,
    Coord,
    GameMode,
    ImpactMarker,
    Orientation,
    Phase,
    PlayerId,
    ShipTemplate,
    ShipTypeId,
    ShotResult,
)


@dataclass(slots=True)
class ShipInstance:
    """One ship of one player.

    Damage is tracked per segment index, so moving or rotating a damaged ship
    keeps its hits attached to the same segments.
    """

    uid: str
    type_id: ShipTypeId
    owner: PlayerId
    anchor: Coord = Coord(0, 0)
    orientation: Orientation = Orientation.HORIZONTAL
    hits: set[int] = field(default_factory=set)
    placed: bool = False
    sunk: bool = False

    @property
    def template(self) -> ShipTemplate:
        return template_for(self.type_id)

    @property
    def size(self) -> int:
        return self.template.size

    @property
    def is_active(self) -> bool:
        """Placed and afloat: can fire, move and block other ships."""
        return self.placed and not self.sunk

    def cells(self) -> list[Coord]:
        return footprint(self.anchor, self.orientation, self.size)

    def cells_at(self, anchor: Coord, orientation: Orientation | None = None) -> list[Coord]:
        """Footprint this ship would have at another anchor/orientation."""
        return footprint(anchor, orientation or self.orientation, self.size)

    def segment_at(self, coord: Coord) -> int | None:
        for index, cell in enumerate(self.cells()):
            if cell == coord:
                return index
        return None

    def damaged_cells(self) -> list[Coord]:
        cells = self.cells()
        return [cells[index] for index in sorted(self.hits)]


@dataclass(slots=True)
class PlayerState:
    """Fleet plus this player's private view of the opponent's board."""

    id: PlayerId
    name: str
    is_ai: bool
    ships: list[ShipInstance]
    misses: set[Coord] = field(default_factory=set)
    ephemeral_hits: set[Coord] = field(default_factory=set)
    ephemeral_impact_markers: list[ImpactMarker] = field(default_factory=list)
    destroyed_enemy_types: list[ShipTypeId] = field(default_factory=list)
    destroyed_enemy_ship_uids: list[str] = field(default_factory=list)

    def ship(self, uid: str) -> ShipInstance | None:
        for ship in self.ships:
            if ship.uid == uid:
                return ship
        return None

    def ship_of_type(self, type_id: ShipTypeId) -> ShipInstance:
        for ship in self.ships:
            if ship.type_id == type_id:
                return ship
        raise KeyError(f"player {self.id} has no {type_id}")

    def active_ships(self) -> list[ShipInstance]:
        return [ship for ship in self.ships if ship.is_active]

    def has_afloat_ship(self) -> bool:
        return any(not ship.sunk for ship in self.ships)


@dataclass(slots=True)
class GameState:
    """Both players, per-round firing bookkeeping, shot log and phase."""

    mode: GameMode
    players: tuple[PlayerState, PlayerState]
    phase: Phase = Phase.PLACEMENT_P1
    round: int = 1
    fired_this_round: tuple[set[str], set[str]] = field(default_factory=lambda: (set(), set()))
    shot_log: list[ShotResult] = field(default_factory=list)
    winner: PlayerId | None = None
    clear_misses_each_round: bool = True

    def player(self, player_id: PlayerId) -> PlayerState:
        return self.players[player_id]

    def all_ships(self) -> Iterator[ShipInstance]:
        for player in self.players:
            yield from player.ships


def ship_uid(owner: PlayerId, type_id: ShipTypeId) -> str:
    return f"{owner}-{type_id.value}"


def owner_of_uid(uid: str) -> PlayerId | None:
    """Parse the owner index out of a ship uid, ``None`` if malformed."""
    prefix, _, _ = uid.partition("-")
    if prefix == "0":
        return 0
    if prefix == "1":
        return 1
    return None


def create_player(player_id: PlayerId, name: str, is_ai: bool) -> PlayerState:
    ships = [
        ShipInstance(uid=ship_uid(player_id, template.id), type_id=template.id, owner=player_id)
        for template in SHIPS
    ]
    return PlayerState(id=player_id, name=name, is_ai=is_ai, ships=ships)


def create_initial_state(
    mode: GameMode | str, *, clear_misses_each_round: bool = True
) -> GameState:
    """Create a fresh game with both fleets unplaced."""
    resolved = GameMode(mode)
    single = resolved is GameMode.ONE_PLAYER
    first = create_player(0, "Player 1", False)
    second = create_player(1, "Easy AI" if single else "Player 2", single)
    return GameState(
        mode=resolved,
        players=(first, second),
        clear_misses_each_round=clear_misses_each_round,
    )


def find_ship(state: GameState, uid: str) -> ShipInstance | None:
    owner = owner_of_uid(uid)
    if owner is None:
        return None
    return state.players[owner].ship(uid)


def require_ship(state: GameState, uid: str) -> ShipInstance:
    """Return a ship that must exist. A missing uid is a caller bug."""
    ship = find_ship(state, uid)
    if ship is None:
        raise KeyError(f"unknown ship uid: {uid}")
    return ship


def occupancy(
    ships: Iterable[ShipInstance], *, ignore_uid: str | None = None
) -> OccupancyGrid:
    """Occupancy of every placed, unsunk ship except ``ignore_uid``."""
    return OccupancyGrid.from_footprints(
        (ship.uid, ship.cells()) for ship in ships if ship.is_active and ship.uid != ignore_uid
    )


def validate_player_id(player_id: int) -> PlayerId:
    if player_id not in PLAYER_IDS:
        raise ValueError(f"player id must be 0 or 1, got {player_id}")
    return player_id
