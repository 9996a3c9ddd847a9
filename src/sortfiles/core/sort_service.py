#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
分类复制服务

界面只调用本模块的两个入口：
1. scan(root) -> 按数量降序排列的文件类型列表
2. copy_files(root, destination, selected) -> CopyOutcome

入口负责输入校验，并把核心模块的致命错误包装为带阶段信息的 OperationError。
两个入口都是同步的，界面需要在后台线程中调用。

作者: SortFiles Project
创建时间: 2025-09-02
"""

import os
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from sortfiles.core.extension_classifier import count_extensions
from sortfiles.core.file_copier import CopyOutcome, CopyOperationError, copy_selected_files
from sortfiles.core.file_traverser import TraversalError
from sortfiles.core.friendly_names import display_label
from sortfiles.i18n.i18n_manager import I18nManager

logger = logging.getLogger(__name__)

STAGE_SCAN = "scan"
STAGE_COPY = "copy"


class InvalidInputError(ValueError):
    """输入参数无效（源目录不存在、目标目录为空等）"""
    pass


class OperationError(Exception):
    """扫描或复制整体失败"""

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage
        self.message = message

    def __str__(self) -> str:
        return f"[{self.stage}] {self.message}"


@dataclass
class FileTypeItem:
    """界面中显示的一种文件类型"""
    extension: str
    label: str
    count: int
    selected: bool = False


class FileTypeSelection:
    """最近一次扫描的文件类型列表及用户的勾选状态"""

    def __init__(self, items: Optional[Iterable[FileTypeItem]] = None):
        self.items: List[FileTypeItem] = list(items or [])

    def replace(self, items: Iterable[FileTypeItem]) -> None:
        """新的扫描结果替换旧列表"""
        self.items = list(items)

    def find(self, extension: str) -> Optional[FileTypeItem]:
        key = (extension or "").lower()
        for item in self.items:
            if item.extension == key:
                return item
        return None

    def set_selected(self, extension: str, selected: bool) -> bool:
        item = self.find(extension)
        if item is None:
            return False
        item.selected = selected
        return True

    def toggle(self, extension: str) -> bool:
        """切换勾选状态，返回切换后的状态"""
        item = self.find(extension)
        if item is None:
            raise KeyError(extension)
        item.selected = not item.selected
        return item.selected

    def select_all(self) -> None:
        for item in self.items:
            item.selected = True

    def clear_selection(self) -> None:
        for item in self.items:
            item.selected = False

    def selected_extensions(self) -> Set[str]:
        return {item.extension for item in self.items if item.selected}

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


def _validate_source(root) -> str:
    source = os.fspath(root).strip() if root is not None else ""
    if not source:
        raise InvalidInputError("未指定源目录")
    if not os.path.isdir(source):
        raise InvalidInputError(f"源目录不存在: {source}")
    return source


def normalize_selection(extensions: Iterable[str]) -> Set[str]:
    """扩展名统一为小写并补全前导 '.'，忽略空值"""
    normalized = set()
    for ext in extensions or []:
        ext = (ext or "").strip().lower()
        if not ext or ext == ".":
            continue
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext)
    return normalized


def scan(root, max_workers: Optional[int] = None, follow_symlinks: bool = True,
         i18n: Optional[I18nManager] = None) -> List[FileTypeItem]:
    """
    扫描源目录并统计文件类型

    Args:
        root: 源目录
        max_workers: 线程数
        follow_symlinks: 是否进入指向目录的符号链接
        i18n: 用于友好名称的国际化管理器，默认使用全局实例

    Returns:
        按数量降序、扩展名升序排列的 FileTypeItem 列表

    Raises:
        InvalidInputError: 源目录无效
        OperationError: 扫描失败（stage="scan"）
    """
    source = _validate_source(root)
    try:
        tally = count_extensions(source, max_workers=max_workers, follow_symlinks=follow_symlinks)
    except (TraversalError, OSError) as e:
        logger.error(f"扫描失败: {source}, 错误: {e}")
        raise OperationError(STAGE_SCAN, str(e)) from e

    return [
        FileTypeItem(extension=ext, label=display_label(ext, i18n), count=count)
        for ext, count in tally.sorted_items()
    ]


def copy_files(root, destination, selected_extensions: Iterable[str],
               max_workers: Optional[int] = None,
               follow_symlinks: bool = True) -> CopyOutcome:
    """
    将选中类型的文件复制到目标目录

    Args:
        root: 源目录
        destination: 目标目录
        selected_extensions: 选中的扩展名，为空时不做任何复制
        max_workers: 线程数
        follow_symlinks: 是否进入指向目录的符号链接

    Returns:
        CopyOutcome 复制结果

    Raises:
        InvalidInputError: 源目录或目标目录无效
        OperationError: 复制失败（stage="copy"）
    """
    source = _validate_source(root)
    target = os.fspath(destination).strip() if destination is not None else ""
    if not target:
        raise InvalidInputError("未指定目标目录")

    selected = normalize_selection(selected_extensions)
    if not selected:
        logger.info("未选择任何文件类型，跳过复制")
        return CopyOutcome()

    try:
        return copy_selected_files(source, target, selected,
                                   max_workers=max_workers, follow_symlinks=follow_symlinks)
    except CopyOperationError as e:
        raise OperationError(STAGE_COPY, str(e)) from e
