#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
应用路径管理器

本模块提供跨平台的应用数据目录管理，支持：
1. 自动检测操作系统类型
2. 获取系统标准应用数据目录
3. 支持便携模式和安装模式
4. 通过环境变量 SORTFILES_HOME 指定数据目录
5. 自动创建必要的目录结构

作者: SortFiles Project
创建时间: 2025-09-02
"""

import os
import platform
from pathlib import Path
from typing import Optional, Dict
import logging

logger = logging.getLogger(__name__)

APP_NAME = "SortFiles"
HOME_ENV_VAR = "SORTFILES_HOME"


class AppPaths:
    """应用路径管理器"""

    def __init__(self, portable_mode: bool = False, app_name: str = APP_NAME,
                 app_data_dir: Optional[Path] = None):
        """
        初始化应用路径管理器

        Args:
            portable_mode: 是否为便携模式
            app_name: 应用名称
            app_data_dir: 显式指定的数据目录（优先级最高）
        """
        self.portable_mode = portable_mode
        self.app_name = app_name
        self._explicit_dir = Path(app_data_dir) if app_data_dir else None
        self._init_paths()

    def _init_paths(self):
        """初始化应用路径"""
        env_dir = os.environ.get(HOME_ENV_VAR)
        if self._explicit_dir is not None:
            self.app_data_dir = self._explicit_dir
        elif env_dir:
            self.app_data_dir = Path(env_dir)
            logger.info(f"使用环境变量指定的数据目录 {self.app_data_dir}")
        elif self.portable_mode:
            # 便携模式：使用程序目录
            self.app_data_dir = Path(__file__).resolve().parent.parent / "app_data"
            logger.info(f"便携模式：使用程序目录 {self.app_data_dir}")
        else:
            self.app_data_dir = self._get_system_app_data_dir()
            logger.info(f"安装模式：使用系统目录 {self.app_data_dir}")

        self._ensure_directories()

    def _get_system_app_data_dir(self) -> Path:
        """
        获取系统标准应用数据目录

        Returns:
            系统标准应用数据目录路径
        """
        system = platform.system().lower()

        if system == "windows":
            # Windows: %APPDATA%/SortFiles/
            appdata = os.environ.get('APPDATA')
            if not appdata:
                appdata = os.path.expanduser("~/AppData/Roaming")
            return Path(appdata) / self.app_name

        elif system == "darwin":
            return Path.home() / "Library" / "Application Support" / self.app_name

        else:
            return Path.home() / ".config" / self.app_name

    def _ensure_directories(self):
        """确保必要的目录存在"""
        for directory in (self.config_dir, self.logs_dir, self.locales_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
                logger.debug(f"确保目录存在: {directory}")
            except OSError as e:
                logger.error(f"创建目录失败 {directory}: {e}")

    @property
    def config_dir(self) -> Path:
        return self.app_data_dir / "config"

    @property
    def app_settings_file(self) -> Path:
        """应用设置文件路径"""
        return self.config_dir / "app_settings.json"

    @property
    def logs_dir(self) -> Path:
        """日志目录路径"""
        return self.app_data_dir / "data" / "logs"

    @property
    def user_data_dir(self) -> Path:
        return self.app_data_dir / "user_data"

    @property
    def locales_dir(self) -> Path:
        """语言文件目录路径"""
        return self.user_data_dir / "locales"

    def get_all_paths(self) -> Dict[str, Path]:
        """获取所有路径的字典"""
        return {
            'app_data_dir': self.app_data_dir,
            'config_dir': self.config_dir,
            'app_settings_file': self.app_settings_file,
            'logs_dir': self.logs_dir,
            'locales_dir': self.locales_dir,
        }


# 全局实例
_app_paths = None


def get_app_paths(portable_mode: Optional[bool] = None) -> AppPaths:
    """
    获取应用路径管理器实例（单例模式）

    Args:
        portable_mode: 是否为便携模式，None 时自动检测

    Returns:
        AppPaths实例
    """
    global _app_paths
    if _app_paths is None:
        if portable_mode is None:
            portable_mode = detect_portable_mode()
        _app_paths = AppPaths(portable_mode=portable_mode)
    return _app_paths


def reset_app_paths():
    """重置路径管理器实例（用于测试）"""
    global _app_paths
    _app_paths = None


def detect_portable_mode() -> bool:
    """检查程序目录中是否存在便携模式标记文件"""
    portable_marker = Path(__file__).resolve().parent.parent / "portable_mode.txt"
    return portable_marker.exists()
