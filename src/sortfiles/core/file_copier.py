#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
文件复制器 - 复制阶段

本模块负责：
1. 重新遍历源目录，筛选选中扩展名的文件
2. 为每个文件在目标目录中确定不冲突的文件名：
   name.ext -> name(1).ext -> name(2).ext -> ...
3. 通过独占创建 (O_CREAT | O_EXCL) 原子地占用目标文件名，再写入内容
4. 单个文件失败只记录，不中断整体操作；目标目录无法创建或源目录无法遍历时整体失败

作者: SortFiles Project
创建时间: 2025-09-02
"""

import os
import shutil
import threading
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Set, Tuple

from sortfiles.core.file_traverser import enumerate_files, TraversalError
from sortfiles.core.extension_classifier import extract_extension, normalize_extension
from sortfiles.core.worker_pool import run_in_batches

logger = logging.getLogger(__name__)


class CopyOperationError(Exception):
    """复制操作整体失败（目标目录无法创建或源目录无法遍历）"""
    pass


@dataclass
class CopyOutcome:
    """一次复制操作的结果"""
    succeeded: int = 0
    failures: List[Tuple[str, str]] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def record_success(self) -> None:
        with self._lock:
            self.succeeded += 1

    def record_failure(self, path: str, message: str) -> None:
        with self._lock:
            self.failures.append((path, message))

    @property
    def failed(self) -> int:
        with self._lock:
            return len(self.failures)

    @property
    def has_failures(self) -> bool:
        return self.failed > 0


def split_file_name(filename: str) -> Tuple[str, str]:
    """按最后一个 '.' 拆分为 (主名, 扩展名)，没有 '.' 时扩展名为空"""
    index = filename.rfind('.')
    if index < 0:
        return filename, ""
    return filename[:index], filename[index:]


def candidate_names(filename: str) -> Iterator[str]:
    """依次产出候选文件名: name.ext, name(1).ext, name(2).ext, ..."""
    yield filename
    stem, ext = split_file_name(filename)
    n = 1
    while True:
        yield f"{stem}({n}){ext}"
        n += 1


def unique_target_path(destination, filename: str) -> str:
    """
    返回目标目录中第一个不存在的候选路径

    先检查后创建，不能防止并发写入者抢占同一文件名，复制时使用 reserve_target_path。
    """
    destination = os.fspath(destination)
    for name in candidate_names(filename):
        target = os.path.join(destination, name)
        if not os.path.lexists(target):
            return target


def reserve_target_path(destination, filename: str) -> str:
    """
    以独占方式创建第一个可用的候选文件，返回其路径

    Args:
        destination: 目标目录
        filename: 原始文件名

    Returns:
        已创建的空文件路径，调用方负责写入内容

    Raises:
        OSError: 除文件已存在之外的创建错误
    """
    destination = os.fspath(destination)
    flags = os.O_WRONLY | os.O_CREAT | os.O_EXCL | getattr(os, "O_BINARY", 0)
    for name in candidate_names(filename):
        target = os.path.join(destination, name)
        try:
            fd = os.open(target, flags, 0o666)
        except FileExistsError:
            continue
        except PermissionError:
            # Windows 上同名目录会报 PermissionError
            if os.path.isdir(target):
                continue
            raise
        os.close(fd)
        return target


def _copy_into_reserved(source: str, target: str) -> None:
    """将源文件内容和元数据写入已占用的目标文件"""
    shutil.copyfile(source, target)
    shutil.copystat(source, target)


def _discard_reserved(target: str) -> None:
    try:
        os.remove(target)
    except OSError as e:
        logger.warning(f"清理未完成的目标文件失败: {target}, 错误: {e}")


def copy_file_to_directory(source: str, destination) -> str:
    """
    将单个文件复制到目标目录，不覆盖已有文件

    Returns:
        实际写入的目标路径
    """
    target = reserve_target_path(destination, os.path.basename(source))
    try:
        _copy_into_reserved(source, target)
    except Exception:
        _discard_reserved(target)
        raise
    return target


def _iter_selected(root, destination: str, selected: Set[str],
                   follow_symlinks: bool) -> Iterator[str]:
    for file_path in enumerate_files(root, follow_symlinks=follow_symlinks, skip_dirs=[destination]):
        if normalize_extension(extract_extension(file_path)) in selected:
            yield file_path


def copy_selected_files(root, destination, selected_extensions: Iterable[str],
                        max_workers: Optional[int] = None,
                        follow_symlinks: bool = True) -> CopyOutcome:
    """
    将源目录树中选中扩展名的文件复制到目标目录

    Args:
        root: 源目录
        destination: 目标目录，不存在时自动创建
        selected_extensions: 选中的扩展名（带 '.'，大小写不敏感）
        max_workers: 线程数，1 表示单线程
        follow_symlinks: 是否进入指向目录的符号链接

    Returns:
        CopyOutcome 复制结果；选中集合为空时直接返回空结果

    Raises:
        CopyOperationError: 目标目录无法创建或源目录无法遍历
    """
    outcome = CopyOutcome()
    selected = {normalize_extension(ext) for ext in selected_extensions}
    selected.discard("")
    if not selected:
        logger.info("未选择任何扩展名，跳过复制")
        return outcome

    destination = os.path.abspath(os.fspath(destination))
    try:
        os.makedirs(destination, exist_ok=True)
    except OSError as e:
        logger.error(f"无法创建目标目录: {destination}, 错误: {e}")
        raise CopyOperationError(f"无法创建目标目录 {destination}: {e}") from e

    logger.info(f"开始复制: {root} -> {destination}, 扩展名: {', '.join(sorted(selected))}")

    def _copy_one(file_path: str) -> None:
        try:
            target = copy_file_to_directory(file_path, destination)
        except (OSError, shutil.Error) as e:
            logger.warning(f"复制文件失败: {file_path}, 错误: {e}")
            outcome.record_failure(file_path, str(e))
            return
        outcome.record_success()
        logger.debug(f"文件已复制: {file_path} -> {target}")

    try:
        run_in_batches(
            _iter_selected(root, destination, selected, follow_symlinks),
            _copy_one,
            max_workers=max_workers,
            thread_name_prefix="sortfiles-copy",
        )
    except TraversalError as e:
        logger.error(f"复制中止: {e}")
        raise CopyOperationError(str(e)) from e

    logger.info(f"复制完成: 成功 {outcome.succeeded} 个, 失败 {outcome.failed} 个")
    return outcome
