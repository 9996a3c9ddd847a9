#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
国际化管理模块

本模块提供多语言支持功能，包括：
1. 语言文件加载和管理（首次运行时写出内置语言文件）
2. 语言切换功能
3. 语言检测和回退机制
4. 动态文本翻译

文件类型的友好名称也放在语言文件的 file_types 分类中。

作者: SortFiles Project
创建时间: 2025-09-02
"""

import json
import locale
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

logger = logging.getLogger(__name__)


DEFAULT_TRANSLATIONS: Dict[str, Dict[str, Dict[str, str]]] = {
    "ru-RU": {
        "app": {
            "title": "Сортировка файлов",
            "source_directory": "Исходная папка:",
            "destination_directory": "Папка назначения:",
            "browse": "Обзор...",
            "scan": "Сканировать",
            "copy_selected": "Копировать выбранные",
            "select_all": "Выбрать все",
            "clear_selection": "Снять выбор",
            "column_selected": "✓",
            "column_type": "Тип файла",
            "column_count": "Количество"
        },
        "messages": {
            "warning": "Внимание",
            "error": "Ошибка",
            "error_status": "Ошибка",
            "select_existing_source": "Укажите существующую исходную папку.",
            "select_destination": "Укажите папку назначения.",
            "select_at_least_one_type": "Выберите хотя бы один тип файла.",
            "scanning": "Сканирование...",
            "copying": "Копирование...",
            "no_files_found": "Файлы не найдены",
            "types_found": "Найдено типов: {count}",
            "files_copied": "Скопировано файлов: {count}",
            "some_files_failed": "Некоторые файлы не удалось скопировать. Проверьте доступ и повторите.",
            "scan_failed": "Ошибка при сканировании: {error}",
            "copy_failed": "Ошибка при копировании: {error}"
        },
        "file_types": {
            "generic_file": "Файл",
            "photo_jpeg": "Фото JPEG",
            "image_png": "Изображение PNG",
            "image_gif": "Изображение GIF",
            "image_bmp": "Изображение BMP",
            "photo_heic": "Фото HEIC",
            "image_tiff": "Изображение TIFF",
            "audio_mp3": "Аудио MP3",
            "audio_flac": "Аудио FLAC",
            "audio_wav": "Аудио WAV",
            "audio_aac": "Аудио AAC",
            "audio_ogg": "Аудио OGG",
            "audio_wma": "Аудио WMA",
            "video_mp4": "Видео MP4",
            "video_mov": "Видео MOV",
            "video_avi": "Видео AVI",
            "video_mkv": "Видео MKV",
            "word_document": "Документ Word",
            "excel_spreadsheet": "Таблица Excel",
            "powerpoint_presentation": "Презентация PowerPoint",
            "pdf_document": "PDF документ",
            "text_file": "Текстовый файл",
            "csv_file": "CSV файл",
            "archive_zip": "Архив ZIP",
            "archive_rar": "Архив RAR",
            "archive_7z": "Архив 7z"
        }
    },
    "en-US": {
        "app": {
            "title": "Sort Files",
            "source_directory": "Source folder:",
            "destination_directory": "Destination folder:",
            "browse": "Browse...",
            "scan": "Scan",
            "copy_selected": "Copy selected",
            "select_all": "Select all",
            "clear_selection": "Clear selection",
            "column_selected": "✓",
            "column_type": "File type",
            "column_count": "Count"
        },
        "messages": {
            "warning": "Warning",
            "error": "Error",
            "error_status": "Error",
            "select_existing_source": "Choose an existing source folder.",
            "select_destination": "Choose a destination folder.",
            "select_at_least_one_type": "Select at least one file type.",
            "scanning": "Scanning...",
            "copying": "Copying...",
            "no_files_found": "No files found",
            "types_found": "Types found: {count}",
            "files_copied": "Files copied: {count}",
            "some_files_failed": "Some files could not be copied. Check access and try again.",
            "scan_failed": "Scan failed: {error}",
            "copy_failed": "Copy failed: {error}"
        },
        "file_types": {
            "generic_file": "File",
            "photo_jpeg": "JPEG photo",
            "image_png": "PNG image",
            "image_gif": "GIF image",
            "image_bmp": "BMP image",
            "photo_heic": "HEIC photo",
            "image_tiff": "TIFF image",
            "audio_mp3": "MP3 audio",
            "audio_flac": "FLAC audio",
            "audio_wav": "WAV audio",
            "audio_aac": "AAC audio",
            "audio_ogg": "OGG audio",
            "audio_wma": "WMA audio",
            "video_mp4": "MP4 video",
            "video_mov": "MOV video",
            "video_avi": "AVI video",
            "video_mkv": "MKV video",
            "word_document": "Word document",
            "excel_spreadsheet": "Excel spreadsheet",
            "powerpoint_presentation": "PowerPoint presentation",
            "pdf_document": "PDF document",
            "text_file": "Text file",
            "csv_file": "CSV file",
            "archive_zip": "ZIP archive",
            "archive_rar": "RAR archive",
            "archive_7z": "7z archive"
        }
    }
}


class I18nManager:
    """国际化管理器"""

    def __init__(self, default_language: str = "ru-RU", locales_dir: Optional[Path] = None):
        """
        初始化国际化管理器

        Args:
            default_language: 默认语言代码
            locales_dir: 语言文件目录，默认为应用数据目录下的 user_data/locales
        """
        self.default_language = default_language
        self.current_language = default_language
        self.translations: Dict[str, Dict[str, Any]] = {}
        if locales_dir is None:
            from sortfiles.utils.app_paths import get_app_paths
            locales_dir = get_app_paths().locales_dir
        self.locales_dir = Path(locales_dir)
        self._load_language_files()

    def _load_language_files(self):
        """加载语言文件，语言文件中的文本覆盖内置文本"""
        try:
            self.locales_dir.mkdir(parents=True, exist_ok=True)
            self._create_default_language_files(self.locales_dir)
        except OSError as e:
            logger.error(f"语言文件目录不可用 {self.locales_dir}: {e}")

        for lang_code, sections in DEFAULT_TRANSLATIONS.items():
            self.translations[lang_code] = {name: dict(texts) for name, texts in sections.items()}

        if not self.locales_dir.is_dir():
            return

        for lang_file in sorted(self.locales_dir.glob("*.json")):
            lang_code = lang_file.stem
            try:
                with open(lang_file, 'r', encoding='utf-8') as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                logger.error(f"加载语言文件失败 {lang_code}: {e}")
                continue
            if not isinstance(loaded, dict):
                logger.error(f"语言文件格式错误 {lang_code}: 根元素不是对象")
                continue
            merged = self.translations.setdefault(lang_code, {})
            for section, texts in loaded.items():
                if isinstance(texts, dict):
                    merged.setdefault(section, {}).update(texts)
            logger.info(f"加载语言文件: {lang_code}")

    def _create_default_language_files(self, locales_dir: Path):
        """为缺失的内置语言写出默认语言文件"""
        for lang_code, translations in DEFAULT_TRANSLATIONS.items():
            lang_file = locales_dir / f"{lang_code}.json"
            if not lang_file.exists():
                self._save_language_file(lang_file, translations)

    def _save_language_file(self, file_path: Path, translations: Dict[str, Any]):
        """保存语言文件"""
        try:
            with open(file_path, 'w', encoding='utf-8') as f:
                json.dump(translations, f, ensure_ascii=False, indent=2)
            logger.info(f"创建语言文件: {file_path}")
        except OSError as e:
            logger.error(f"创建语言文件失败 {file_path}: {e}")

    def has_text(self, key: str, section: str = "app") -> bool:
        """当前语言或默认语言中是否存在该文本"""
        for language in (self.current_language, self.default_language):
            if key in self.translations.get(language, {}).get(section, {}):
                return True
        return False

    def get_text(self, key: str, section: str = "app", **kwargs) -> str:
        """
        获取翻译文本

        Args:
            key: 文本键
            section: 文本分类
            **kwargs: 格式化参数

        Returns:
            翻译后的文本，找不到时返回键本身
        """
        current_translations = self.translations.get(self.current_language, {})
        text = current_translations.get(section, {}).get(key)

        # 如果当前语言没有找到，尝试默认语言
        if text is None and self.current_language != self.default_language:
            default_translations = self.translations.get(self.default_language, {})
            text = default_translations.get(section, {}).get(key)

        if text is None:
            return key

        if kwargs:
            try:
                text = text.format(**kwargs)
            except (KeyError, IndexError, ValueError):
                logger.warning(f"文本格式化失败: {key}, 参数: {kwargs}")

        return text

    def set_language(self, language_code: str) -> bool:
        """
        设置当前语言

        Args:
            language_code: 语言代码

        Returns:
            是否设置成功
        """
        if language_code in self.translations:
            self.current_language = language_code
            logger.info(f"语言切换为: {language_code}")
            return True
        logger.warning(f"不支持的语言: {language_code}")
        return False

    def get_available_languages(self) -> List[str]:
        """获取可用语言列表"""
        return list(self.translations.keys())

    def detect_system_language(self) -> str:
        """
        检测系统语言

        Returns:
            检测到的语言代码，无法识别时返回默认语言
        """
        try:
            system_locale = locale.getlocale()[0]
        except ValueError as e:
            logger.error(f"检测系统语言失败: {e}")
            system_locale = None
        if system_locale:
            if system_locale.lower().startswith('ru'):
                return 'ru-RU'
            if system_locale.lower().startswith('en'):
                return 'en-US'
        return self.default_language

    def reload_language_files(self):
        """重新加载语言文件"""
        self.translations.clear()
        self._load_language_files()
        logger.info("语言文件重新加载完成")


# 全局实例
_i18n_manager = None


def get_i18n_manager() -> I18nManager:
    """
    获取国际化管理器实例（单例模式）

    Returns:
        国际化管理器实例
    """
    global _i18n_manager
    if _i18n_manager is None:
        _i18n_manager = I18nManager()
    return _i18n_manager


def reset_i18n_manager():
    """重置国际化管理器实例（用于测试）"""
    global _i18n_manager
    _i18n_manager = None


def t(key: str, section: str = "app", **kwargs) -> str:
    """
    获取翻译文本的便捷函数

    Args:
        key: 文本键
        section: 文本分类
        **kwargs: 格式化参数

    Returns:
        翻译后的文本
    """
    return get_i18n_manager().get_text(key, section, **kwargs)
