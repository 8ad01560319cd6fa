# SPDX-License-Identifier: Apache-2.0
"""Unit tests for ConfigManager."""

import json
import os
from pathlib import Path

import pytest

from config import __version__, app_config
from config.app_config import APP_DIR_NAME, ConfigManager, get_default_config_version


def test_config_manager_merges_defaults(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config.Path, "home", lambda: tmp_path)

    user_config_dir = tmp_path / APP_DIR_NAME
    user_config_dir.mkdir()
    (user_config_dir / "app_config.json").write_text(
        json.dumps({"matching": {"min_score": 25}}), encoding="utf-8"
    )

    manager = ConfigManager()

    assert manager.get("matching.min_score") == 25
    assert manager.get("matching.default_device_score") == 98
    assert manager.get("enumeration.direction") == "output"
    assert manager.get("logging.level") == "INFO"


def test_defaults_without_user_file(tmp_path):
    manager = ConfigManager(user_config_path=tmp_path / "missing.json")

    assert manager.get("matching.enable_position_correlation") is False
    assert manager.get("matching.excluded_foreign_ids") == ["communications"]
    assert manager.get("does.not.exist", "fallback") == "fallback"


def test_default_config_version_matches_package_version():
    assert get_default_config_version() == __version__


@pytest.mark.parametrize(
    "override, error",
    [
        ({"enumeration": {"direction": "sideways"}}, ValueError),
        ({"enumeration": {"command_timeout_seconds": 0}}, ValueError),
        ({"enumeration": {"command_timeout_seconds": True}}, ValueError),
        ({"enumeration": {"linux_backends": "alsa"}}, TypeError),
        ({"enumeration": {"linux_backends": ["oss"]}}, ValueError),
        ({"matching": {"enable_position_correlation": "yes"}}, TypeError),
        ({"matching": {"min_score": 150}}, ValueError),
        ({"matching": {"excluded_foreign_ids": "communications"}}, TypeError),
        ({"logging": {"level": "LOUD"}}, ValueError),
        ({"logging": {"file_enabled": 1}}, TypeError),
        ({"matching": []}, TypeError),
    ],
)
def test_invalid_user_config_is_rejected(tmp_path, override, error):
    path = tmp_path / "app_config.json"
    path.write_text(json.dumps(override), encoding="utf-8")

    with pytest.raises(error):
        ConfigManager(user_config_path=path)


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "app_config.json"
    path.write_text("{", encoding="utf-8")

    with pytest.raises(json.JSONDecodeError):
        ConfigManager(user_config_path=path)


def test_set_and_save_round_trip(tmp_path):
    path = tmp_path / "nested" / "app_config.json"
    manager = ConfigManager(user_config_path=path)

    manager.set("matching.enable_position_correlation", True)
    manager.save()

    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["matching"]["enable_position_correlation"] is True
    if os.name == "posix":
        assert (path.stat().st_mode & 0o777) == 0o600

    reloaded = ConfigManager(user_config_path=path)
    assert reloaded.get("matching.enable_position_correlation") is True


def test_get_all_returns_copy(tmp_path):
    manager = ConfigManager(user_config_path=tmp_path / "app_config.json")

    snapshot = manager.get_all()
    snapshot["matching"]["min_score"] = 99

    assert manager.get("matching.min_score") == 0


def test_get_defaults_is_read_only(tmp_path):
    manager = ConfigManager(user_config_path=tmp_path / "app_config.json")

    defaults = manager.get_defaults()

    with pytest.raises(TypeError):
        defaults["matching"]["min_score"] = 5
    assert isinstance(defaults["enumeration"]["linux_backends"], tuple)


def test_default_app_dir_is_under_home(tmp_path, monkeypatch):
    monkeypatch.setattr(app_config.Path, "home", lambda: tmp_path)

    assert app_config.get_app_dir() == Path(tmp_path) / APP_DIR_NAME
