"""Headless entry point: plays a seeded admiral-vs-admiral match."""

from __future__ import annotations

import logging

from moving_battleships.ai.factory import build_admiral
from moving_battleships.app.autoplay import AutoplayResult, play_out
from moving_battleships.app.match import Match
from moving_battleships.core.models import GameMode
from moving_battleships.core.rng import SeededRng
from moving_battleships.infra.config import load_default_env_files, load_game_config
from moving_battleships.infra.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> AutoplayResult:
    """Run one automated match using ``MB_*`` settings."""
    load_default_env_files()
    setup_logging()
    config = load_game_config()
    logger.info(
        "autoplay_start seed=%d difficulty=%s max_rounds=%d",
        config.seed,
        config.ai_difficulty,
        config.max_rounds,
    )
    rng = SeededRng(config.seed)
    match = Match.from_config(config, mode=GameMode.TWO_PLAYER)
    admirals = (build_admiral(config.ai_difficulty, rng), build_admiral(config.ai_difficulty, rng))
    return play_out(match, admirals, max_rounds=config.max_rounds)


if __name__ == "__main__":
    main()
