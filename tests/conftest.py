"""测试公共配置：把 src 加入路径，并把应用数据目录隔离到临时目录。"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from sortfiles.i18n.i18n_manager import reset_i18n_manager  # noqa: E402
from sortfiles.utils.app_paths import HOME_ENV_VAR, reset_app_paths  # noqa: E402


@pytest.fixture(autouse=True)
def isolated_app_home(tmp_path_factory, monkeypatch) -> Path:
    """每个测试使用独立的应用数据目录和全新的单例"""
    home = tmp_path_factory.mktemp("app_home")
    monkeypatch.setenv(HOME_ENV_VAR, str(home))
    reset_app_paths()
    reset_i18n_manager()
    yield home
    reset_app_paths()
    reset_i18n_manager()


def make_tree(root: Path, files) -> Path:
    """按相对路径创建文件，内容为路径本身"""
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(rel.encode("utf-8"))
    return root


@pytest.fixture
def tree(tmp_path):
    """返回在 tmp_path/src 下创建文件树的函数"""
    def _make(files):
        root = tmp_path / "src"
        root.mkdir(exist_ok=True)
        return make_tree(root, files)
    return _make


@pytest.fixture
def deny_dirs(monkeypatch):
    """让指定目录的 os.scandir 抛出 PermissionError（测试可能以 root 身份运行，chmod 不可靠）"""
    import os

    denied = set()
    real_scandir = os.scandir

    def fake_scandir(path="."):
        if os.path.normcase(os.path.abspath(os.fspath(path))) in denied:
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    def _deny(*paths):
        for p in paths:
            denied.add(os.path.normcase(os.path.abspath(os.fspath(p))))

    return _deny
