"""分类复制服务入口测试"""

import os

import pytest

from sortfiles.core import sort_service
from sortfiles.core.file_traverser import TraversalError
from sortfiles.core.sort_service import (
    FileTypeItem,
    FileTypeSelection,
    InvalidInputError,
    OperationError,
    copy_files,
    normalize_selection,
    scan,
)


def test_scan_returns_sorted_labelled_items(tree):
    root = tree(["a.JPG", "b.jpg", "c.jpg", "d.xyz", "e.pdf", "f.pdf", "noext"])
    items = scan(root)
    assert items == [
        FileTypeItem(".jpg", "Фото JPEG (.jpg)", 3),
        FileTypeItem(".pdf", "PDF документ (.pdf)", 2),
        FileTypeItem(".xyz", "Файл (.xyz)", 1),
    ]
    assert not any(item.selected for item in items)


def test_scan_empty_tree(tmp_path):
    assert scan(tmp_path) == []


@pytest.mark.parametrize("root", ["", "   ", None])
def test_scan_requires_source(root):
    with pytest.raises(InvalidInputError):
        scan(root)


def test_scan_rejects_missing_source(tmp_path):
    with pytest.raises(InvalidInputError):
        scan(tmp_path / "missing")


def test_scan_wraps_fatal_errors_with_stage(tmp_path, monkeypatch):
    def broken(*args, **kwargs):
        raise TraversalError("root vanished")

    monkeypatch.setattr(sort_service, "count_extensions", broken)
    with pytest.raises(OperationError) as excinfo:
        scan(tmp_path)
    assert excinfo.value.stage == "scan"
    assert "root vanished" in str(excinfo.value)


def test_normalize_selection():
    assert normalize_selection(["TXT", ".Jpg", " .pdf ", "", " ", ".", None]) == {".txt", ".jpg", ".pdf"}


def test_copy_files_end_to_end(tree, tmp_path):
    root = tree(["a.txt", "b.txt", "c.jpg"])
    dest = tmp_path / "dest"

    selection = FileTypeSelection(scan(root))
    selection.set_selected(".txt", True)
    outcome = copy_files(root, dest, selection.selected_extensions())

    assert outcome.succeeded == 2
    assert sorted(os.listdir(dest)) == ["a.txt", "b.txt"]


def test_copy_files_accepts_extension_without_dot(tree, tmp_path):
    root = tree(["a.txt", "b.jpg"])
    dest = tmp_path / "dest"
    assert copy_files(root, dest, ["TXT"]).succeeded == 1


@pytest.mark.parametrize("destination", ["", "  ", None])
def test_copy_files_requires_destination(tree, destination):
    root = tree(["a.txt"])
    with pytest.raises(InvalidInputError):
        copy_files(root, destination, {".txt"})


def test_copy_files_empty_selection_is_noop(tree, tmp_path):
    root = tree(["a.txt"])
    dest = tmp_path / "dest"
    outcome = copy_files(root, dest, [])
    assert outcome.succeeded == 0
    assert not outcome.has_failures
    assert not dest.exists()


def test_copy_files_fatal_error_names_copy_stage(tree, tmp_path):
    root = tree(["a.txt"])
    blocker = tmp_path / "blocker"
    blocker.write_text("file")
    with pytest.raises(OperationError) as excinfo:
        copy_files(root, blocker, {".txt"})
    assert excinfo.value.stage == "copy"
    assert str(excinfo.value).startswith("[copy]")


def test_selection_operations():
    selection = FileTypeSelection([
        FileTypeItem(".jpg", "Фото JPEG (.jpg)", 3),
        FileTypeItem(".txt", "Текстовый файл (.txt)", 1),
    ])
    assert selection.selected_extensions() == set()

    assert selection.toggle(".JPG") is True
    assert selection.selected_extensions() == {".jpg"}
    assert selection.toggle(".jpg") is False

    selection.select_all()
    assert selection.selected_extensions() == {".jpg", ".txt"}
    selection.clear_selection()
    assert selection.selected_extensions() == set()

    assert selection.set_selected(".zip", True) is False
    with pytest.raises(KeyError):
        selection.toggle(".zip")

    selection.replace([FileTypeItem(".pdf", "PDF документ (.pdf)", 7)])
    assert [item.extension for item in selection] == [".pdf"]
    assert len(selection) == 1
