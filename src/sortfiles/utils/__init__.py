#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
工具模块

包含应用路径、应用设置和日志配置。
"""

# 延迟导入，避免循环依赖

__all__ = [
    "app_paths",
    "app_settings",
    "log_setup",
]
