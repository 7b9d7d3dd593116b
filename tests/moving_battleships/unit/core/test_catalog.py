from __future__ import annotations

import pytest

from moving_battleships.core.catalog import SHIPS, template_for
from moving_battleships.core.models import ShipTypeId


def test_catalog_has_five_classes_in_size_order() -> None:
    assert [template.id for template in SHIPS] == list(ShipTypeId)
    sizes = [template.size for template in SHIPS]
    assert sizes == sorted(set(sizes))
    assert sizes == [2, 3, 4, 5, 6]


def test_bigger_ships_carry_more_guns_and_move_no_further() -> None:
    for smaller, larger in zip(SHIPS, SHIPS[1:]):
        assert larger.gun_count > smaller.gun_count
        assert larger.move <= smaller.move


def test_template_lookup() -> None:
    assert template_for(ShipTypeId.SCOUT).move == 3
    assert template_for("dreadnought").gun_count == 5
    with pytest.raises(KeyError):
        template_for("submarine")
