#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
日志配置

控制台输出加上按启动时间命名的日志文件，重复调用不会重复添加处理器。
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

_configured = False
_configured_log_file: Optional[Path] = None


def setup_logging(level: int = logging.INFO, log_dir: Optional[Path] = None) -> Optional[Path]:
    """
    设置日志记录

    Args:
        level: 日志级别
        log_dir: 日志目录，默认为应用数据目录下的 data/logs

    Returns:
        日志文件路径；日志文件无法创建时只输出到控制台并返回 None
    """
    global _configured, _configured_log_file
    if _configured:
        return _configured_log_file

    if log_dir is None:
        from sortfiles.utils.app_paths import get_app_paths
        log_dir = get_app_paths().logs_dir

    handlers = [logging.StreamHandler()]
    log_path = Path(log_dir) / f"sortfiles_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.insert(0, logging.FileHandler(log_path, encoding='utf-8'))
    except OSError as e:
        log_path = None
        print(f"日志文件创建失败，仅输出到控制台: {e}")

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers)
    _configured = True
    _configured_log_file = log_path
    logging.info("日志初始化完成")
    return log_path
