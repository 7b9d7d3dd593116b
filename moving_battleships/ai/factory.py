"""Admiral selection by difficulty name."""

from __future__ import annotations

import logging

from moving_battleships.ai.random_admiral import RandomAdmiral
from moving_battleships.ai.strategy import AdmiralStrategy
from moving_battleships.core.rng import SeededRng

logger = logging.getLogger(__name__)

DIFFICULTIES: tuple[str, ...] = ("Easy",)


def build_admiral(difficulty: str, rng: SeededRng) -> AdmiralStrategy:
    """Construct the admiral for ``difficulty``; unknown names get the easy one."""
    selected = difficulty.strip().capitalize()
    if selected not in DIFFICULTIES:
        logger.warning("unknown_ai_difficulty value=%s fallback=Easy", difficulty)
    return RandomAdmiral(rng)
