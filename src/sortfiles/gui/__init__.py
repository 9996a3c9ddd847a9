#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GUI模块

包含所有图形用户界面相关的组件。
"""

# 延迟导入，避免循环依赖

__all__ = [
    "main_window",
    "theme",
]
