#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
国际化模块

包含多语言支持和翻译管理功能。
"""

# 延迟导入，避免循环依赖

__all__ = [
    "i18n_manager",
]
