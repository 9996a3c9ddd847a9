"""国际化管理器与文件类型友好名称测试"""

import json

import pytest

from sortfiles.core.friendly_names import FRIENDLY_NAME_KEYS, display_label, lookup
from sortfiles.i18n.i18n_manager import DEFAULT_TRANSLATIONS, I18nManager, get_i18n_manager, t


@pytest.fixture
def locales_dir(tmp_path):
    return tmp_path / "locales"


def test_default_language_files_are_written(locales_dir):
    I18nManager(locales_dir=locales_dir)
    assert sorted(p.name for p in locales_dir.glob("*.json")) == ["en-US.json", "ru-RU.json"]
    saved = json.loads((locales_dir / "ru-RU.json").read_text(encoding="utf-8"))
    assert saved["file_types"]["generic_file"] == "Файл"


def test_every_table_key_has_labels_in_all_languages():
    for language, sections in DEFAULT_TRANSLATIONS.items():
        missing = set(FRIENDLY_NAME_KEYS.values()) - set(sections["file_types"])
        assert not missing, language


def test_get_text_formatting_and_missing_key(locales_dir):
    i18n = I18nManager(locales_dir=locales_dir)
    assert i18n.get_text("files_copied", "messages", count=5) == "Скопировано файлов: 5"
    assert i18n.get_text("no_such_key", "messages") == "no_such_key"


def test_set_language(locales_dir):
    i18n = I18nManager(locales_dir=locales_dir)
    assert i18n.set_language("en-US") is True
    assert i18n.get_text("scan") == "Scan"
    assert i18n.set_language("xx-XX") is False
    assert i18n.current_language == "en-US"


def test_partial_language_falls_back_to_default(locales_dir):
    locales_dir.mkdir(parents=True)
    (locales_dir / "de-DE.json").write_text(json.dumps({"app": {"scan": "Scannen"}}), encoding="utf-8")
    i18n = I18nManager(locales_dir=locales_dir)
    assert i18n.set_language("de-DE")
    assert i18n.get_text("scan") == "Scannen"
    assert i18n.get_text("browse") == "Обзор..."


def test_locale_file_overrides_builtin_text(locales_dir):
    locales_dir.mkdir(parents=True)
    (locales_dir / "ru-RU.json").write_text(
        json.dumps({"file_types": {"photo_jpeg": "Фотография"}}), encoding="utf-8")
    i18n = I18nManager(locales_dir=locales_dir)
    assert display_label(".JPG", i18n) == "Фотография (.jpg)"
    assert display_label(".png", i18n) == "Изображение PNG (.png)"


def test_malformed_locale_file_is_ignored(locales_dir):
    locales_dir.mkdir(parents=True)
    (locales_dir / "ru-RU.json").write_text("{not json", encoding="utf-8")
    i18n = I18nManager(locales_dir=locales_dir)
    assert i18n.get_text("scan") == "Сканировать"


def test_lookup_is_case_insensitive(locales_dir):
    i18n = I18nManager(locales_dir=locales_dir)
    assert lookup(".JPEG", i18n) == "Фото JPEG"
    assert lookup(".xyz", i18n) is None
    assert lookup("", i18n) is None


def test_display_label_fallback_uses_generic_name(locales_dir):
    i18n = I18nManager(locales_dir=locales_dir)
    assert display_label(".XYZ", i18n) == "Файл (.xyz)"
    i18n.set_language("en-US")
    assert display_label(".XYZ", i18n) == "File (.xyz)"
    assert display_label(".Docx", i18n) == "Word document (.docx)"


def test_global_manager_uses_app_home(isolated_app_home):
    assert t("title") == "Сортировка файлов"
    assert get_i18n_manager().locales_dir == isolated_app_home / "user_data" / "locales"
    assert (isolated_app_home / "user_data" / "locales" / "en-US.json").exists()


def test_reload_picks_up_new_language_files(locales_dir):
    i18n = I18nManager(locales_dir=locales_dir)
    assert sorted(i18n.get_available_languages()) == ["en-US", "ru-RU"]

    (locales_dir / "de-DE.json").write_text(json.dumps({"app": {"scan": "Scannen"}}), encoding="utf-8")
    i18n.reload_language_files()

    assert "de-DE" in i18n.get_available_languages()
    assert i18n.set_language("de-DE")
    assert i18n.get_text("scan") == "Scannen"
