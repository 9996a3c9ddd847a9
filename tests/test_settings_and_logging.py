"""应用路径、应用设置与日志配置测试"""

import json
import logging

import pytest

from sortfiles.utils import log_setup
from sortfiles.utils.app_paths import AppPaths, get_app_paths
from sortfiles.utils.app_settings import AppSettings, load_settings, save_settings


def test_app_paths_follow_env_home(isolated_app_home):
    paths = get_app_paths()
    assert paths.app_data_dir == isolated_app_home
    assert paths.app_settings_file == isolated_app_home / "config" / "app_settings.json"
    for directory in (paths.config_dir, paths.logs_dir, paths.locales_dir):
        assert directory.is_dir()
    assert get_app_paths() is paths


def test_app_paths_explicit_directory(tmp_path):
    paths = AppPaths(app_data_dir=tmp_path / "custom")
    assert paths.get_all_paths()["logs_dir"] == tmp_path / "custom" / "data" / "logs"
    assert paths.logs_dir.is_dir()


def test_missing_settings_file_gives_defaults():
    settings = load_settings()
    assert settings.language == "ru-RU"
    assert settings.theme == "system"
    assert settings.max_workers >= 1
    assert settings.follow_symlinks is True
    assert settings.last_source == ""


def test_settings_saved_and_loaded(tmp_path):
    path = tmp_path / "app_settings.json"
    save_settings(AppSettings(language="en-US", theme="dark", max_workers=3,
                              follow_symlinks=False, last_source="/src", last_destination="/dst"), path)

    raw = json.loads(path.read_text(encoding="utf-8"))
    assert raw["general"] == {"language": "en-US", "theme": "dark"}
    assert not path.with_name("app_settings.json.tmp").exists()

    loaded = load_settings(path)
    assert loaded == AppSettings(language="en-US", theme="dark", max_workers=3,
                                 follow_symlinks=False, last_source="/src", last_destination="/dst")


def test_save_uses_app_home_by_default(isolated_app_home):
    save_settings(AppSettings(last_source="/photos"))
    assert load_settings().last_source == "/photos"
    assert (isolated_app_home / "config" / "app_settings.json").exists()


def test_malformed_settings_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "app_settings.json"
    path.write_text("{broken", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)
    assert settings.theme == "system"
    assert "读取应用设置失败" in caplog.text


@pytest.mark.parametrize("data, field, expected", [
    ({"general": {"theme": "neon"}}, "theme", "system"),
    ({"file_processing": {"max_workers": 0}}, "max_workers", 1),
    ({"file_processing": {"max_workers": True}}, "max_workers", AppSettings().max_workers),
    ({"file_processing": {"follow_symlinks": "no"}}, "follow_symlinks", True),
    ({"recent": {"last_source": 5}}, "last_source", ""),
])
def test_invalid_setting_values_fall_back(data, field, expected):
    assert getattr(AppSettings.from_dict(data), field) == expected


def test_setup_logging_creates_file_once(tmp_path, monkeypatch):
    monkeypatch.setattr(log_setup, "_configured", False)
    monkeypatch.setattr(log_setup, "_configured_log_file", None)

    first = log_setup.setup_logging(log_dir=tmp_path / "logs")
    second = log_setup.setup_logging(log_dir=tmp_path / "other")

    assert first is not None
    assert first.parent == tmp_path / "logs"
    assert first.name.startswith("sortfiles_") and first.suffix == ".log"
    assert first.exists()
    assert second == first
    assert not (tmp_path / "other").exists()
