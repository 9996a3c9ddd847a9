#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
应用设置

读写 config/app_settings.json：界面语言、主题、线程数、是否跟随符号链接，
以及上次使用的源目录和目标目录。文件缺失或损坏时使用默认值。
"""

import os
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from sortfiles.core.worker_pool import resolve_max_workers

logger = logging.getLogger(__name__)

THEMES = ("system", "light", "dark")


@dataclass
class AppSettings:
    """应用设置"""
    language: str = "ru-RU"
    theme: str = "system"
    max_workers: int = field(default_factory=resolve_max_workers)
    follow_symlinks: bool = True
    last_source: str = ""
    last_destination: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppSettings":
        """从设置文件内容构建，未知键忽略，非法值使用默认值"""
        settings = cls()
        general = data.get("general") or {}
        processing = data.get("file_processing") or {}
        recent = data.get("recent") or {}

        if isinstance(general.get("language"), str) and general["language"]:
            settings.language = general["language"]
        if general.get("theme") in THEMES:
            settings.theme = general["theme"]

        workers = processing.get("max_workers")
        if isinstance(workers, int) and not isinstance(workers, bool):
            settings.max_workers = resolve_max_workers(workers)
        if isinstance(processing.get("follow_symlinks"), bool):
            settings.follow_symlinks = processing["follow_symlinks"]

        if isinstance(recent.get("last_source"), str):
            settings.last_source = recent["last_source"]
        if isinstance(recent.get("last_destination"), str):
            settings.last_destination = recent["last_destination"]
        return settings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "general": {
                "language": self.language,
                "theme": self.theme,
            },
            "file_processing": {
                "max_workers": self.max_workers,
                "follow_symlinks": self.follow_symlinks,
            },
            "recent": {
                "last_source": self.last_source,
                "last_destination": self.last_destination,
            },
        }


def _settings_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    from sortfiles.utils.app_paths import get_app_paths
    return get_app_paths().app_settings_file


def load_settings(path: Optional[Path] = None) -> AppSettings:
    """
    加载应用设置

    Args:
        path: 设置文件路径，默认为应用数据目录下的 config/app_settings.json

    Returns:
        AppSettings 实例
    """
    settings_file = _settings_path(path)
    if not settings_file.exists():
        logger.info("应用设置文件不存在，使用默认设置")
        return AppSettings()
    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"读取应用设置失败 {settings_file}: {e}，使用默认设置")
        return AppSettings()
    if not isinstance(data, dict):
        logger.warning(f"应用设置格式错误 {settings_file}，使用默认设置")
        return AppSettings()
    return AppSettings.from_dict(data)


def save_settings(settings: AppSettings, path: Optional[Path] = None) -> None:
    """
    原子写入应用设置（先写临时文件再替换）

    Raises:
        OSError: 写入失败
    """
    settings_file = _settings_path(path)
    settings_file.parent.mkdir(parents=True, exist_ok=True)
    temp_file = settings_file.with_name(settings_file.name + ".tmp")
    try:
        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, ensure_ascii=False, indent=2)
        os.replace(temp_file, settings_file)
    except OSError:
        if temp_file.exists():
            temp_file.unlink()
        raise
    logger.info(f"应用设置已保存: {settings_file}")
