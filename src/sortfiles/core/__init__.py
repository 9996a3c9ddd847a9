#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
核心功能模块

包含目录遍历、扩展名统计、文件复制等核心功能。
"""

# 延迟导入，避免循环依赖

__all__ = [
    "file_traverser",
    "worker_pool",
    "extension_classifier",
    "file_copier",
    "friendly_names",
    "sort_service",
]
