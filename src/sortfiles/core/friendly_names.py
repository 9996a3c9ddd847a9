#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
文件类型友好名称表

扩展名到语言文件 file_types 分类中文本键的静态映射，查询不区分大小写。
"""

from typing import Optional

from sortfiles.i18n.i18n_manager import I18nManager, get_i18n_manager

FRIENDLY_NAME_KEYS = {
    ".jpg": "photo_jpeg",
    ".jpeg": "photo_jpeg",
    ".png": "image_png",
    ".gif": "image_gif",
    ".bmp": "image_bmp",
    ".heic": "photo_heic",
    ".tif": "image_tiff",
    ".tiff": "image_tiff",
    ".mp3": "audio_mp3",
    ".flac": "audio_flac",
    ".wav": "audio_wav",
    ".aac": "audio_aac",
    ".ogg": "audio_ogg",
    ".wma": "audio_wma",
    ".mp4": "video_mp4",
    ".mov": "video_mov",
    ".avi": "video_avi",
    ".mkv": "video_mkv",
    ".doc": "word_document",
    ".docx": "word_document",
    ".xls": "excel_spreadsheet",
    ".xlsx": "excel_spreadsheet",
    ".xlsm": "excel_spreadsheet",
    ".ppt": "powerpoint_presentation",
    ".pptx": "powerpoint_presentation",
    ".pdf": "pdf_document",
    ".txt": "text_file",
    ".rtf": "text_file",
    ".csv": "csv_file",
    ".zip": "archive_zip",
    ".rar": "archive_rar",
    ".7z": "archive_7z",
}

SECTION = "file_types"


def lookup(extension: str, i18n: Optional[I18nManager] = None) -> Optional[str]:
    """
    查询扩展名的友好名称

    Args:
        extension: 带 '.' 的扩展名，大小写不敏感
        i18n: 国际化管理器，默认使用全局实例

    Returns:
        当前语言的友好名称，表中没有时返回 None
    """
    key = FRIENDLY_NAME_KEYS.get((extension or "").lower())
    if key is None:
        return None
    i18n = i18n or get_i18n_manager()
    if not i18n.has_text(key, SECTION):
        return None
    return i18n.get_text(key, SECTION)


def display_label(extension: str, i18n: Optional[I18nManager] = None) -> str:
    """返回 "{友好名称} ({小写扩展名})"，表中没有时使用通用名称"""
    i18n = i18n or get_i18n_manager()
    label = lookup(extension, i18n)
    if label is None:
        label = i18n.get_text("generic_file", SECTION)
    return f"{label} ({extension.lower()})"
