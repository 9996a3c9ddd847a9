#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
批量并行处理工具

遍历在调用线程中进行，产出的路径按批提交到线程池，
同时在途的批次数量有上限，保证超大目录树下内存有界。
"""

import os
import logging
from concurrent.futures import ThreadPoolExecutor, wait, FIRST_COMPLETED
from itertools import islice
from typing import Callable, Iterable, Iterator, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 64
MAX_DEFAULT_WORKERS = 8


def resolve_max_workers(max_workers: Optional[int] = None) -> int:
    """返回实际使用的线程数（至少为1）"""
    if max_workers is None:
        max_workers = min(MAX_DEFAULT_WORKERS, os.cpu_count() or 1)
    return max(1, int(max_workers))


def _batched(items: Iterable[T], batch_size: int) -> Iterator[List[T]]:
    iterator = iter(items)
    while True:
        batch = list(islice(iterator, batch_size))
        if not batch:
            return
        yield batch


def run_in_batches(items: Iterable[T], handler: Callable[[T], None],
                   max_workers: Optional[int] = None,
                   batch_size: int = DEFAULT_BATCH_SIZE,
                   thread_name_prefix: str = "sortfiles") -> int:
    """
    对每个元素调用 handler，可并行

    Args:
        items: 待处理元素（可以是惰性生成器）
        handler: 处理单个元素的函数，需自行保证共享状态的线程安全
        max_workers: 线程数，1 表示在调用线程中顺序处理
        batch_size: 每批元素数量
        thread_name_prefix: 工作线程名前缀

    Returns:
        处理的元素数量

    items 迭代过程中抛出的异常会在等待在途批次完成后原样抛出。
    """
    workers = resolve_max_workers(max_workers)
    if workers == 1:
        processed = 0
        for item in items:
            handler(item)
            processed += 1
        return processed

    def _run_batch(batch: List[T]) -> int:
        for item in batch:
            handler(item)
        return len(batch)

    processed = 0
    pending = set()
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix=thread_name_prefix) as executor:
        for batch in _batched(items, max(1, batch_size)):
            pending.add(executor.submit(_run_batch, batch))
            if len(pending) >= workers * 2:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)
                processed += sum(f.result() for f in done)
        done, _ = wait(pending)
        processed += sum(f.result() for f in done)

    logger.debug(f"并行处理完成: {processed} 项, 线程数 {workers}")
    return processed
