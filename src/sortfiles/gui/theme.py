#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
界面主题状态

ThemeState 保存当前是否为浅色主题，变化时通知订阅者。
"system" 设置在 Windows 上读取注册表 AppsUseLightTheme，其他系统默认浅色。
"""

import sys
import threading
import logging
from typing import Callable, List

logger = logging.getLogger(__name__)

LIGHT_THEME = "flatly"
DARK_THEME = "darkly"

_PERSONALIZE_KEY = r"Software\Microsoft\Windows\CurrentVersion\Themes\Personalize"


def detect_light_theme() -> bool:
    """检测系统是否使用浅色主题，无法检测时返回 True"""
    if sys.platform != "win32":
        return True
    try:
        import winreg
        with winreg.OpenKey(winreg.HKEY_CURRENT_USER, _PERSONALIZE_KEY) as key:
            value, _ = winreg.QueryValueEx(key, "AppsUseLightTheme")
        return int(value) > 0
    except (OSError, ValueError) as e:
        logger.debug(f"读取系统主题失败: {e}")
        return True


def resolve_light_theme(setting: str) -> bool:
    """把主题设置 (system / light / dark) 解析为是否浅色"""
    if setting == "light":
        return True
    if setting == "dark":
        return False
    return detect_light_theme()


class ThemeState:
    """可订阅的主题状态"""

    def __init__(self, is_light: bool = True):
        self._is_light = is_light
        self._subscribers: List[Callable[[bool], None]] = []
        self._lock = threading.Lock()

    @property
    def is_light(self) -> bool:
        return self._is_light

    @property
    def themename(self) -> str:
        """对应的 ttkbootstrap 主题名"""
        return LIGHT_THEME if self._is_light else DARK_THEME

    def subscribe(self, callback: Callable[[bool], None]) -> None:
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)

    def unsubscribe(self, callback: Callable[[bool], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def set(self, is_light: bool) -> bool:
        """
        更新主题，值变化时通知所有订阅者

        Returns:
            值是否发生变化
        """
        with self._lock:
            if self._is_light == is_light:
                return False
            self._is_light = is_light
            subscribers = list(self._subscribers)
        logger.info(f"主题切换为: {'浅色' if is_light else '深色'}")
        for callback in subscribers:
            callback(is_light)
        return True
