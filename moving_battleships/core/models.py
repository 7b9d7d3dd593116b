"""Core value types shared by the rules engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

BOARD_SIZE = 10

PlayerId: TypeAlias = int

PLAYER_IDS: tuple[PlayerId, PlayerId] = (0, 1)


class Orientation(StrEnum):
    """Ship or salvo orientation."""

    HORIZONTAL = "H"
    VERTICAL = "V"


class ShipTypeId(StrEnum):
    """Ship classes, in catalog order."""

    SCOUT = "scout"
    DESTROYER = "destroyer"
    CRUISER = "cruiser"
    BATTLESHIP = "battleship"
    DREADNOUGHT = "dreadnought"


class GameMode(StrEnum):
    """Single player against the AI, or local two player."""

    ONE_PLAYER = "1p"
    TWO_PLAYER = "2p"


class Phase(StrEnum):
    """Game phases."""

    PLACEMENT_P1 = "placement_p1"
    PLACEMENT_P2 = "placement_p2"
    FIRING_P1 = "firing_p1"
    FIRING_P2 = "firing_p2"
    MOVEMENT_P1 = "movement_p1"
    MOVEMENT_P2 = "movement_p2"
    GAME_OVER = "game_over"

    @property
    def player(self) -> PlayerId | None:
        """Player the phase label refers to, if any."""
        if self.value.endswith("p1"):
            return 0
        if self.value.endswith("p2"):
            return 1
        return None

    @property
    def is_placement(self) -> bool:
        return self in (Phase.PLACEMENT_P1, Phase.PLACEMENT_P2)

    @property
    def is_firing(self) -> bool:
        return self in (Phase.FIRING_P1, Phase.FIRING_P2)

    @property
    def is_movement(self) -> bool:
        return self in (Phase.MOVEMENT_P1, Phase.MOVEMENT_P2)


class BoardSide(StrEnum):
    """Which of a player's two boards a marker is drawn on."""

    OWN = "own"
    TARGET = "target"


@dataclass(frozen=True, slots=True)
class Coord:
    """Board coordinate, 0-indexed from the top-left corner."""

    x: int
    y: int


@dataclass(frozen=True, slots=True)
class ShipTemplate:
    """Static description of one ship class."""

    id: ShipTypeId
    name: str
    size: int
    move: int
    gun_count: int


@dataclass(frozen=True, slots=True)
class ShotResult:
    """Outcome of one shell. Appended to the shot log and never mutated."""

    attacker: PlayerId
    defender: PlayerId
    ship_uid: str
    target: Coord
    hit: bool
    damage: int
    hit_ship_uid: str | None = None
    sunk_ship_uid: str | None = None


@dataclass(frozen=True, slots=True)
class ImpactMarker:
    """Transient damage decal, cleared when the round ends."""

    board: BoardSide
    ship_uid: str
    target: Coord


@dataclass(frozen=True, slots=True)
class MoveOrder:
    """Requested end position for one ship. A skip keeps the ship in place."""

    ship_uid: str
    to: Coord
    orientation: Orientation
    skip: bool = False


@dataclass(frozen=True, slots=True)
class SalvoOrder:
    """Firing decision: which ship fires, where, and along which axis."""

    ship_uid: str
    target: Coord
    orientation: Orientation


@dataclass(frozen=True, slots=True)
class MoveResolution:
    """Ships whose orders were applied or rejected by a resolution pass."""

    applied: tuple[str, ...]
    rejected: tuple[str, ...]


def opponent(player_id: PlayerId) -> PlayerId:
    """Return the other player's index."""
    return 1 if player_id == 0 else 0
