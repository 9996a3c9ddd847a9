"""后台工作线程的错误处理测试（不创建窗口）"""

from types import SimpleNamespace

import pytest

main_window = pytest.importorskip("sortfiles.gui.main_window")


@pytest.fixture
def fake_window():
    calls = []
    window = SimpleNamespace(
        settings=SimpleNamespace(max_workers=1, follow_symlinks=True),
        root=SimpleNamespace(after=lambda delay, callback: callback()),
        _show_error=lambda key, message: calls.append(("error", key, message)),
        _show_scan_results=lambda items: calls.append(("scan", items)),
        _show_copy_results=lambda outcome: calls.append(("copy", outcome)),
        _set_busy=lambda busy: calls.append(("busy", busy)),
    )
    window.calls = calls
    return window


def _boom(*args, **kwargs):
    raise RuntimeError("unexpected")


def test_scan_worker_reports_unexpected_errors(fake_window, monkeypatch):
    monkeypatch.setattr(main_window, "scan", _boom)
    main_window.SortFilesGUI._scan_worker(fake_window, "/src")
    assert fake_window.calls == [("error", "scan_failed", "unexpected"), ("busy", False)]


def test_copy_worker_reports_unexpected_errors(fake_window, monkeypatch):
    monkeypatch.setattr(main_window, "copy_files", _boom)
    main_window.SortFilesGUI._copy_worker(fake_window, "/src", "/dst", {".txt"})
    assert fake_window.calls == [("error", "copy_failed", "unexpected"), ("busy", False)]


def test_copy_worker_stage_error_uses_message(fake_window, monkeypatch):
    def failing(*args, **kwargs):
        raise main_window.OperationError("copy", "disk full")

    monkeypatch.setattr(main_window, "copy_files", failing)
    main_window.SortFilesGUI._copy_worker(fake_window, "/src", "/dst", {".txt"})
    assert fake_window.calls[0] == ("error", "copy_failed", "disk full")
