#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SortFiles - 按扩展名分类与批量复制工具

扫描源目录，按扩展名统计文件数量，并将选中类型的文件复制到目标目录（不覆盖同名文件）。
"""

__version__ = "1.0.0"
__author__ = "SortFiles Project"
__email__ = "your-email@example.com"
__description__ = "按扩展名分类与批量复制工具"

# 延迟导入，避免循环依赖

__all__ = [
    "__version__",
    "__author__",
    "__email__",
    "__description__",
]
