"""Application configuration and env loading."""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from moving_battleships.core.models import GameMode

DEFAULT_ENV_FILES: tuple[str, ...] = (".env.app", ".env.app.local")


def parse_env_line(line: str) -> tuple[str, str] | None:
    """Split one ``KEY=VALUE`` line; ``None`` for blanks, comments and junk."""
    text = line.strip()
    if text.startswith("#"):
        return None
    key, sep, value = text.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    value = value.strip()
    if len(value) >= 2 and value[0] in "\"'" and value[-1] == value[0]:
        value = value[1:-1]
    return key, value


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> dict[str, str]:
    """Export the pairs of one env file and return the ones that were applied.

    A missing file is skipped. Matching outer quotes are stripped from values.
    """
    env_path = Path(path)
    if not env_path.is_file():
        return {}

    applied: dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        pair = parse_env_line(line)
        if pair is None:
            continue
        key, value = pair
        if override_existing or key not in os.environ:
            os.environ[key] = value
            applied[key] = value
    return applied


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load env files left to right; later files win."""
    for path in tuple(paths) if paths is not None else DEFAULT_ENV_FILES:
        load_env_file(path, override_existing=override_existing)


def _flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _mode(name: str, default: GameMode) -> GameMode:
    raw = os.getenv(name, "").strip().lower()
    try:
        return GameMode(raw) if raw else default
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Immutable match settings sourced from the environment."""

    seed: int = 90210
    mode: GameMode = GameMode.ONE_PLAYER
    ai_difficulty: str = "Easy"
    clear_misses_each_round: bool = True
    ai_move_retries: int = 6
    max_rounds: int = 200


def load_game_config() -> GameConfig:
    """Load match settings from ``MB_*`` env vars."""
    defaults = GameConfig()
    return GameConfig(
        seed=_int("MB_SEED", defaults.seed),
        mode=_mode("MB_MODE", defaults.mode),
        ai_difficulty=os.getenv("MB_AI_DIFFICULTY", defaults.ai_difficulty).strip()
        or defaults.ai_difficulty,
        clear_misses_each_round=_flag(
            "MB_CLEAR_MISSES_EACH_ROUND", defaults.clear_misses_each_round
        ),
        ai_move_retries=max(1, _int("MB_AI_MOVE_RETRIES", defaults.ai_move_retries)),
        max_rounds=max(1, _int("MB_MAX_ROUNDS", defaults.max_rounds)),
    )
