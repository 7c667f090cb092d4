"""Tests for the config module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from betblock.config import (
    _platform_dirs,
    get_store_path,
    load_config,
    reset_store_path,
    save_config,
    set_monthly_savings,
    set_store_path,
)
from betblock.models import AppConfig


def _patch_config_paths(tmp_path: Path):
    """Return context managers that redirect config and store dirs to tmp_path."""
    cfg_dir = tmp_path / "config"
    cfg_file = cfg_dir / "config.json"
    return (
        patch("betblock.config._CONFIG_DIR", cfg_dir),
        patch("betblock.config._CONFIG_FILE", cfg_file),
        patch("betblock.config._STORE_DIR", tmp_path / "store"),
    )


class TestLoadSaveConfig:
    def test_load_default_when_missing(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            config = load_config()
            assert config.store_path is None
            assert config.monthly_savings == 200

    def test_save_and_load_roundtrip(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg = AppConfig(store_path="/tmp/test.db", monthly_savings=350, projection_months=12)
            path = save_config(cfg)
            assert path.exists()

            loaded = load_config()
            assert loaded.store_path == "/tmp/test.db"
            assert loaded.monthly_savings == 350
            assert loaded.projection_months == 12

    def test_load_handles_corrupt_file(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg_dir = tmp_path / "config"
            cfg_dir.mkdir(parents=True, exist_ok=True)
            (cfg_dir / "config.json").write_text("not valid json{{{")
            config = load_config()
            assert config.store_path is None  # falls back to default

    def test_load_handles_invalid_values(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            cfg_dir = tmp_path / "config"
            cfg_dir.mkdir(parents=True, exist_ok=True)
            (cfg_dir / "config.json").write_text('{"monthly_savings": -5}')
            assert load_config().monthly_savings == 200


class TestStorePath:
    def test_default_path(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            path = get_store_path()
            assert path.name == "betblock.db"
            assert path.parent.is_dir()

    def test_set_store_path(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            custom = tmp_path / "custom" / "my.db"
            cfg = set_store_path(str(custom))
            assert cfg.store_path == str(custom)
            assert get_store_path() == custom

    def test_set_store_path_directory(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            d = tmp_path / "somedir"
            d.mkdir()
            cfg = set_store_path(str(d))
            assert cfg.store_path is not None
            assert cfg.store_path.endswith("betblock.db")

    def test_reset_store_path(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            set_store_path(str(tmp_path / "custom.db"))
            cfg = reset_store_path()
            assert cfg.store_path is None


class TestMonthlySavings:
    def test_set_monthly_savings(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            set_monthly_savings(450)
            assert load_config().monthly_savings == 450

    def test_keeps_other_fields(self, tmp_path: Path) -> None:
        p1, p2, p3 = _patch_config_paths(tmp_path)
        with p1, p2, p3:
            set_store_path(str(tmp_path / "custom.db"))
            cfg = set_monthly_savings(300)
            assert cfg.store_path is not None


class TestPlatformDirs:
    def test_xdg_dirs(self, tmp_path: Path) -> None:
        env = {"XDG_CONFIG_HOME": str(tmp_path / "cfg"), "XDG_DATA_HOME": str(tmp_path / "data")}
        with patch.dict("os.environ", env):
            config_dir, store_dir = _platform_dirs()
        assert config_dir == tmp_path / "cfg" / "betblock"
        assert store_dir == tmp_path / "data" / "betblock"

    def test_android_private_dir(self, tmp_path: Path) -> None:
        env = {"ANDROID_ARGUMENT": "", "ANDROID_PRIVATE": str(tmp_path)}
        with patch.dict("os.environ", env):
            config_dir, store_dir = _platform_dirs()
        assert config_dir == tmp_path / "betblock" / "config"
        assert store_dir == tmp_path / "betblock" / "store"
