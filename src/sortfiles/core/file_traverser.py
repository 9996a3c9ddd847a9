#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
目录遍历器

本模块提供容错的目录树遍历功能，包括：
1. 基于显式待处理目录栈的迭代遍历（不使用递归）
2. 跳过无法访问的子目录，不中断整个遍历
3. 通过目录标识 (st_dev, st_ino) 防止符号链接/联接点造成的循环
4. 惰性生成文件绝对路径，每个目录的文件连续产出

遍历根目录无法列出，或遍历途中根目录消失时，抛出 TraversalError。

作者: SortFiles Project
创建时间: 2025-09-02
"""

import os
import logging
from typing import Iterable, Iterator, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class TraversalError(Exception):
    """遍历根目录无法访问"""
    pass


def _directory_identity(path: str) -> Optional[Tuple[int, int]]:
    """返回目录的 (设备号, inode)；文件系统不提供 inode 时返回 None"""
    st = os.stat(path)
    if st.st_ino == 0:
        return None
    return (st.st_dev, st.st_ino)


def _list_directory(directory: str, follow_symlinks: bool) -> Tuple[List[str], List[str]]:
    """
    列出目录下的直接文件和直接子目录

    Args:
        directory: 目录路径
        follow_symlinks: 是否进入指向目录的符号链接

    Returns:
        (文件路径列表, 子目录路径列表)
    """
    files = []
    subdirs = []
    with os.scandir(directory) as entries:
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    subdirs.append(entry.path)
                elif entry.is_file():
                    files.append(entry.path)
            except OSError:
                # 条目在列出后被删除
                continue
    return files, subdirs


def enumerate_files(root, follow_symlinks: bool = True,
                    skip_dirs: Optional[Iterable[str]] = None) -> Iterator[str]:
    """
    惰性遍历目录树，产出所有文件的绝对路径

    顺序在目录之间不确定，但同一目录的文件连续产出。生成器只能使用一次。

    Args:
        root: 遍历根目录（存在性由调用方检查）
        follow_symlinks: 是否进入指向目录的符号链接
        skip_dirs: 不进入的子目录（绝对路径），例如位于源目录内的目标目录

    Yields:
        文件绝对路径

    Raises:
        TraversalError: 根目录无法列出或在遍历中消失
    """
    root_path = os.path.abspath(os.fspath(root))
    skip_list = [os.path.abspath(os.fspath(d)) for d in (skip_dirs or [])]
    skipped_paths = {os.path.normcase(d) for d in skip_list}
    skipped_ids: Set[Tuple[int, int]] = set()
    for skip_dir in skip_list:
        try:
            identity = _directory_identity(skip_dir)
        except OSError:
            continue
        if identity is not None:
            skipped_ids.add(identity)
    visited: Set[Tuple[int, int]] = set()
    pending = [root_path]
    is_root = True

    while pending:
        directory = pending.pop()
        try:
            identity = _directory_identity(directory)
            # 同一目录可能以符号链接等不同路径出现，按目录标识排除
            if not is_root and (identity in skipped_ids
                                or os.path.normcase(directory) in skipped_paths):
                logger.debug(f"跳过排除的目录: {directory}")
                continue
            if identity is not None:
                if identity in visited:
                    logger.debug(f"目录已遍历过，跳过: {directory}")
                    continue
                visited.add(identity)
            files, subdirs = _list_directory(directory, follow_symlinks)
        except OSError as e:
            if is_root or not os.path.isdir(root_path):
                raise TraversalError(f"无法遍历根目录 {root_path}: {e}") from e
            logger.debug(f"跳过无法访问的目录: {directory} ({e})")
            continue
        finally:
            is_root = False

        for file_path in files:
            yield file_path

        pending.extend(subdirs)
