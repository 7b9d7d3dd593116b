"""Ship class catalog."""

from __future__ import annotations

from moving_battleships.core.models import ShipTemplate, ShipTypeId

SHIPS: tuple[ShipTemplate, ...] = (
    ShipTemplate(id=ShipTypeId.SCOUT, name="Scout", size=2, move=3, gun_count=1),
    ShipTemplate(id=ShipTypeId.DESTROYER, name="Destroyer", size=3, move=2, gun_count=2),
    ShipTemplate(id=ShipTypeId.CRUISER, name="Cruiser", size=4, move=2, gun_count=3),
    ShipTemplate(id=ShipTypeId.BATTLESHIP, name="Battleship", size=5, move=1, gun_count=4),
    ShipTemplate(id=ShipTypeId.DREADNOUGHT, name="Dreadnought", size=6, move=1, gun_count=5),
)

SHIP_BY_ID: dict[ShipTypeId, ShipTemplate] = {template.id: template for template in SHIPS}


def template_for(type_id: ShipTypeId | str) -> ShipTemplate:
    """Return the template for a ship class. Unknown ids raise ``KeyError``."""
    try:
        return SHIP_BY_ID[ShipTypeId(type_id)]
    except ValueError as exc:
        raise KeyError(f"unknown ship type: {type_id}") from exc
