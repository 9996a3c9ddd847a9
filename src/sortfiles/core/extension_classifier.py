#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
扩展名分类器 - 统计阶段

本模块负责：
1. 从文件名中提取扩展名（最后一个 '.' 之后的部分，包含 '.'）
2. 线程安全地累计每种扩展名的文件数量
3. 按数量降序、扩展名升序输出统计结果

没有扩展名的文件不参与统计。

作者: SortFiles Project
创建时间: 2025-09-02
"""

import os
import threading
import logging
from typing import Dict, List, Optional, Tuple

from sortfiles.core.file_traverser import enumerate_files
from sortfiles.core.worker_pool import run_in_batches

logger = logging.getLogger(__name__)


def extract_extension(path) -> str:
    """
    提取文件扩展名，保留原始大小写

    Args:
        path: 文件路径或文件名

    Returns:
        扩展名（如 ".JPG"），没有扩展名时返回空字符串
    """
    name = os.path.basename(os.fspath(path))
    index = name.rfind('.')
    if index < 0 or index == len(name) - 1:
        return ""
    return name[index:]


def normalize_extension(extension: str) -> str:
    """扩展名统一为小写，用于比较和存储"""
    return (extension or "").lower()


class ExtensionTally:
    """扩展名计数表（线程安全）"""

    def __init__(self):
        self._counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def add(self, extension: str) -> bool:
        """
        累加一次扩展名计数

        Args:
            extension: 扩展名，大小写不敏感

        Returns:
            是否计入（空扩展名不计入）
        """
        key = normalize_extension(extension)
        if not key:
            return False
        with self._lock:
            self._counts[key] = self._counts.get(key, 0) + 1
        return True

    def get(self, extension: str) -> int:
        with self._lock:
            return self._counts.get(normalize_extension(extension), 0)

    def as_dict(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)

    def sorted_items(self) -> List[Tuple[str, int]]:
        """按数量降序、扩展名升序排序的 (扩展名, 数量) 列表"""
        return sorted(self.as_dict().items(), key=lambda pair: (-pair[1], pair[0]))

    @property
    def total(self) -> int:
        with self._lock:
            return sum(self._counts.values())

    def __len__(self) -> int:
        with self._lock:
            return len(self._counts)

    def __contains__(self, extension) -> bool:
        return self.get(extension) > 0


def count_extensions(root, max_workers: Optional[int] = None,
                     follow_symlinks: bool = True) -> ExtensionTally:
    """
    遍历目录树并统计扩展名

    Args:
        root: 源目录
        max_workers: 线程数，1 表示单线程
        follow_symlinks: 是否进入指向目录的符号链接

    Returns:
        ExtensionTally 统计结果

    Raises:
        TraversalError: 根目录无法遍历
    """
    tally = ExtensionTally()
    logger.info(f"开始统计扩展名: {root}")

    def _count_one(file_path: str) -> None:
        tally.add(extract_extension(file_path))

    scanned = run_in_batches(
        enumerate_files(root, follow_symlinks=follow_symlinks),
        _count_one,
        max_workers=max_workers,
        thread_name_prefix="sortfiles-scan",
    )

    logger.info(f"扩展名统计完成: 扫描文件 {scanned} 个, 计入 {tally.total} 个, 类型 {len(tally)} 种")
    return tally
