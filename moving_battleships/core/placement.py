"""Pre-battle fleet placement."""

from __future__ import annotations

from moving_battleships.core.catalog import SHIPS
from moving_battleships.core.grid import in_bounds
from moving_battleships.core.models import BOARD_SIZE, Coord, Orientation
from moving_battleships.core.rng import SeededRng
from moving_battleships.core.state import PlayerState, ShipInstance, occupancy

PLACEMENT_ATTEMPTS = 500


def can_place_ship(
    player: PlayerState, ship: ShipInstance, anchor: Coord, orientation: Orientation
) -> bool:
    """Return whether the ship fits at ``anchor`` without overlapping its own fleet.

    Enemy ships are never considered; the ship's current footprint is ignored
    so it may be re-placed over itself.
    """
    occupied = occupancy(player.ships, ignore_uid=ship.uid)
    for cell in ship.cells_at(anchor, orientation):
        if not in_bounds(cell):
            return False
        if occupied.owner_at(cell) is not None:
            return False
    return True


def place_ship(player: PlayerState, uid: str, anchor: Coord, orientation: Orientation) -> bool:
    """Place or re-place one ship. Returns ``False`` and changes nothing if illegal."""
    ship = player.ship(uid)
    if ship is None or ship.sunk:
        return False
    if not can_place_ship(player, ship, anchor, orientation):
        return False
    ship.anchor = anchor
    ship.orientation = orientation
    ship.placed = True
    return True


def all_ships_placed(player: PlayerState) -> bool:
    return all(ship.placed for ship in player.ships)


def random_fleet_placement(
    player: PlayerState, rng: SeededRng, attempts: int = PLACEMENT_ATTEMPTS
) -> bool:
    """Sample legal placements in catalog order.

    Each ship gets at most ``attempts`` tries; a ship that runs out stays
    unplaced. Returns whether the whole fleet ended up placed.
    """
    for template in SHIPS:
        ship = player.ship_of_type(template.id)
        for _ in range(attempts):
            orientation = Orientation.HORIZONTAL if rng.random() > 0.5 else Orientation.VERTICAL
            anchor = Coord(rng.randrange(BOARD_SIZE), rng.randrange(BOARD_SIZE))
            if place_ship(player, ship.uid, anchor, orientation):
                break
    return all_ships_placed(player)
