from __future__ import annotations

import os

import pytest

from moving_battleships.core.models import GameMode
from moving_battleships.infra.config import (
    GameConfig,
    load_default_env_files,
    load_env_file,
    load_game_config,
    parse_env_line,
)

_KEYS = (
    "MB_SEED",
    "MB_MODE",
    "MB_AI_DIFFICULTY",
    "MB_CLEAR_MISSES_EACH_ROUND",
    "MB_AI_MOVE_RETRIES",
    "MB_MAX_ROUNDS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in _KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)


def test_load_env_file_strips_quotes_and_skips_noise(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env.app"
    env_file.write_text("MB_SEED=7\nMB_MODE='2p'\n# comment\nBROKEN\n=orphan\n", encoding="utf-8")
    load_env_file(str(env_file))
    assert os.environ.get("MB_SEED") == "7"
    assert os.environ.get("MB_MODE") == "2p"


def test_load_env_file_can_keep_existing_values(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env.app"
    env_file.write_text("MB_SEED=7\n", encoding="utf-8")
    monkeypatch.setenv("MB_SEED", "1")
    load_env_file(str(env_file), override_existing=False)
    assert os.environ.get("MB_SEED") == "1"


def test_missing_env_file_is_ignored(tmp_path) -> None:
    load_env_file(str(tmp_path / ".env.missing"))
    assert "MB_SEED" not in os.environ


def test_local_env_file_wins(tmp_path) -> None:
    app_env = tmp_path / ".env.app"
    local_env = tmp_path / ".env.app.local"
    app_env.write_text("MB_SEED=1\nMB_MAX_ROUNDS=9\n", encoding="utf-8")
    local_env.write_text("MB_SEED=2\n", encoding="utf-8")

    load_default_env_files(paths=(str(app_env), str(local_env)))

    config = load_game_config()
    assert config.seed == 2
    assert config.max_rounds == 9


def test_defaults_without_env() -> None:
    assert load_game_config() == GameConfig()
    assert GameConfig().seed == 90210
    assert GameConfig().mode is GameMode.ONE_PLAYER


def test_env_overrides_and_sanitising(monkeypatch) -> None:
    monkeypatch.setenv("MB_SEED", "not-a-number")
    monkeypatch.setenv("MB_MODE", "2P")
    monkeypatch.setenv("MB_AI_DIFFICULTY", "   ")
    monkeypatch.setenv("MB_CLEAR_MISSES_EACH_ROUND", "off")
    monkeypatch.setenv("MB_AI_MOVE_RETRIES", "0")
    monkeypatch.setenv("MB_MAX_ROUNDS", "-3")

    config = load_game_config()

    assert config.seed == 90210
    assert config.mode is GameMode.TWO_PLAYER
    assert config.ai_difficulty == "Easy"
    assert config.clear_misses_each_round is False
    assert config.ai_move_retries == 1
    assert config.max_rounds == 1


def test_unknown_mode_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("MB_MODE", "3p")
    assert load_game_config().mode is GameMode.ONE_PLAYER


def test_parse_env_line() -> None:
    assert parse_env_line("  MB_SEED = 5 ") == ("MB_SEED", "5")
    assert parse_env_line('MB_MODE="2p"') == ("MB_MODE", "2p")
    assert parse_env_line("MB_AI_DIFFICULTY='Easy\"") == ("MB_AI_DIFFICULTY", "'Easy\"")
    assert parse_env_line("MB_URL=a=b") == ("MB_URL", "a=b")
    for junk in ("", "   ", "# MB_SEED=1", "NO_EQUALS", "=value"):
        assert parse_env_line(junk) is None


def test_load_env_file_reports_applied_pairs(tmp_path, monkeypatch) -> None:
    env_file = tmp_path / ".env.app"
    env_file.write_text("MB_SEED=7\nMB_MODE=2p\n", encoding="utf-8")
    monkeypatch.setenv("MB_SEED", "1")

    applied = load_env_file(str(env_file), override_existing=False)

    assert applied == {"MB_MODE": "2p"}
    assert load_env_file(str(tmp_path / "missing")) == {}
