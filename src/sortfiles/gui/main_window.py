#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SortFiles 主窗口

选择源目录 -> 扫描文件类型 -> 勾选类型 -> 选择目标目录 -> 复制。
扫描和复制在后台线程中执行，结果通过 root.after 回到界面线程。
同一时间只允许一个操作，操作进行中按钮处于禁用状态。
"""

import ttkbootstrap as tb
from ttkbootstrap.constants import *
from tkinter import filedialog, messagebox
import threading
import os
import logging

from sortfiles.core.sort_service import (
    FileTypeSelection,
    InvalidInputError,
    OperationError,
    copy_files,
    scan,
)
from sortfiles.gui.theme import ThemeState, detect_light_theme, resolve_light_theme
from sortfiles.i18n.i18n_manager import get_i18n_manager, t
from sortfiles.utils.app_settings import load_settings, save_settings
from sortfiles.utils.log_setup import setup_logging

logger = logging.getLogger(__name__)

CHECKED = "☑"
UNCHECKED = "☐"
THEME_POLL_MS = 30000


class SortFilesGUI:
    """文件分类复制图形界面"""

    def __init__(self):
        """初始化 GUI 应用"""
        self.settings = load_settings()
        self._initialize_language()

        self.theme = ThemeState(resolve_light_theme(self.settings.theme))
        self.root = tb.Window(themename=self.theme.themename)
        self.root.title(t("title", "app"))
        self.root.geometry("760x560")
        self.root.minsize(600, 420)

        self.source_directory = tb.StringVar(value=self.settings.last_source)
        self.target_directory = tb.StringVar(value=self.settings.last_destination)
        self.status_text = tb.StringVar(value="")

        self.selection = FileTypeSelection()
        self._busy = False

        self.create_widgets()
        self.center_window()

        self.theme.subscribe(self._on_theme_changed)
        if self.settings.theme == "system":
            self.root.after(THEME_POLL_MS, self._poll_system_theme)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)

    def _initialize_language(self):
        """初始化语言设置"""
        i18n_manager = get_i18n_manager()
        if not i18n_manager.set_language(self.settings.language):
            system_language = i18n_manager.detect_system_language()
            i18n_manager.set_language(system_language)

    def center_window(self):
        """将窗口居中显示"""
        self.root.update_idletasks()
        width = self.root.winfo_width()
        height = self.root.winfo_height()
        x = (self.root.winfo_screenwidth() // 2) - (width // 2)
        y = (self.root.winfo_screenheight() // 2) - (height // 2)
        self.root.geometry(f"{width}x{height}+{x}+{y}")

    def create_widgets(self):
        """创建界面组件"""
        main_frame = tb.Frame(self.root, padding=15)
        main_frame.pack(fill=BOTH, expand=True)

        paths_frame = tb.Frame(main_frame)
        paths_frame.pack(fill=X, pady=(0, 10))
        paths_frame.columnconfigure(1, weight=1)

        tb.Label(paths_frame, text=t("source_directory", "app")).grid(row=0, column=0, sticky=W, pady=3)
        tb.Entry(paths_frame, textvariable=self.source_directory).grid(row=0, column=1, sticky=EW, padx=5)
        tb.Button(paths_frame, text=t("browse", "app"), command=self.select_source_directory,
                  bootstyle=SECONDARY).grid(row=0, column=2)

        tb.Label(paths_frame, text=t("destination_directory", "app")).grid(row=1, column=0, sticky=W, pady=3)
        tb.Entry(paths_frame, textvariable=self.target_directory).grid(row=1, column=1, sticky=EW, padx=5)
        tb.Button(paths_frame, text=t("browse", "app"), command=self.select_target_directory,
                  bootstyle=SECONDARY).grid(row=1, column=2)

        # 文件类型列表
        list_frame = tb.Frame(main_frame)
        list_frame.pack(fill=BOTH, expand=True)
        self.types_tree = tb.Treeview(list_frame, columns=("selected", "type", "count"),
                                      show="headings", selectmode="browse")
        self.types_tree.heading("selected", text=t("column_selected", "app"))
        self.types_tree.heading("type", text=t("column_type", "app"))
        self.types_tree.heading("count", text=t("column_count", "app"))
        self.types_tree.column("selected", width=40, anchor=CENTER, stretch=False)
        self.types_tree.column("type", width=420)
        self.types_tree.column("count", width=100, anchor=E, stretch=False)
        scrollbar = tb.Scrollbar(list_frame, orient=VERTICAL, command=self.types_tree.yview)
        self.types_tree.configure(yscrollcommand=scrollbar.set)
        self.types_tree.pack(side=LEFT, fill=BOTH, expand=True)
        scrollbar.pack(side=RIGHT, fill=Y)
        self.types_tree.bind("<Button-1>", self.on_tree_click)
        self.types_tree.bind("<space>", self.on_tree_space)

        button_frame = tb.Frame(main_frame)
        button_frame.pack(fill=X, pady=(10, 0))
        self.scan_button = tb.Button(button_frame, text=t("scan", "app"), command=self.start_scan,
                                     bootstyle=PRIMARY)
        self.scan_button.pack(side=LEFT)
        self.select_all_button = tb.Button(button_frame, text=t("select_all", "app"),
                                           command=self.select_all, bootstyle=(INFO, OUTLINE))
        self.select_all_button.pack(side=LEFT, padx=(10, 0))
        self.clear_button = tb.Button(button_frame, text=t("clear_selection", "app"),
                                      command=self.clear_selection, bootstyle=(INFO, OUTLINE))
        self.clear_button.pack(side=LEFT, padx=(5, 0))
        self.copy_button = tb.Button(button_frame, text=t("copy_selected", "app"),
                                     command=self.start_copy, bootstyle=SUCCESS)
        self.copy_button.pack(side=RIGHT)

        tb.Label(main_frame, textvariable=self.status_text, anchor=W).pack(fill=X, pady=(8, 0))

    def _pick_folder(self, initial: str):
        """弹出目录选择框，取消时返回 None"""
        path = filedialog.askdirectory(parent=self.root, initialdir=initial or None, mustexist=False)
        return path or None

    def select_source_directory(self):
        path = self._pick_folder(self.source_directory.get())
        if path:
            self.source_directory.set(path)

    def select_target_directory(self):
        path = self._pick_folder(self.target_directory.get())
        if path:
            self.target_directory.set(path)

    # 文件类型列表

    def refresh_types_tree(self):
        self.types_tree.delete(*self.types_tree.get_children())
        for item in self.selection:
            self.types_tree.insert("", END, iid=item.extension,
                                   values=(CHECKED if item.selected else UNCHECKED, item.label, item.count))

    def _toggle_row(self, extension: str):
        selected = self.selection.toggle(extension)
        self.types_tree.set(extension, "selected", CHECKED if selected else UNCHECKED)

    def on_tree_click(self, event):
        if self.types_tree.identify_region(event.x, event.y) != "cell":
            return
        row = self.types_tree.identify_row(event.y)
        if row:
            self._toggle_row(row)

    def on_tree_space(self, event):
        row = self.types_tree.focus()
        if row:
            self._toggle_row(row)

    def select_all(self):
        self.selection.select_all()
        self.refresh_types_tree()

    def clear_selection(self):
        self.selection.clear_selection()
        self.refresh_types_tree()

    # 后台操作

    def _set_busy(self, busy: bool):
        self._busy = busy
        state = DISABLED if busy else NORMAL
        for button in (self.scan_button, self.copy_button, self.select_all_button, self.clear_button):
            button.config(state=state)

    def _warn(self, key: str):
        messagebox.showwarning(t("warning", "messages"), t(key, "messages"), parent=self.root)

    def start_scan(self):
        """开始扫描"""
        if self._busy:
            return
        source = self.source_directory.get().strip()
        if not source or not os.path.isdir(source):
            self._warn("select_existing_source")
            return

        self.selection.replace([])
        self.refresh_types_tree()
        self.status_text.set(t("scanning", "messages"))
        self._set_busy(True)
        threading.Thread(target=self._scan_worker, args=(source,), daemon=True).start()

    def _scan_worker(self, source: str):
        try:
            items = scan(source, max_workers=self.settings.max_workers,
                         follow_symlinks=self.settings.follow_symlinks)
        except (InvalidInputError, OperationError) as e:
            error_msg = e.message if isinstance(e, OperationError) else str(e)
            logger.error(f"扫描失败: {error_msg}")
            self.root.after(0, lambda: self._show_error("scan_failed", error_msg))
        except Exception as e:
            error_msg = str(e)
            logger.exception(f"扫描时发生意外错误: {error_msg}")
            self.root.after(0, lambda: self._show_error("scan_failed", error_msg))
        else:
            self.root.after(0, lambda: self._show_scan_results(items))
        finally:
            self.root.after(0, lambda: self._set_busy(False))

    def _show_scan_results(self, items):
        self.selection.replace(items)
        self.refresh_types_tree()
        if len(self.selection) == 0:
            self.status_text.set(t("no_files_found", "messages"))
        else:
            self.status_text.set(t("types_found", "messages", count=len(self.selection)))

    def start_copy(self):
        """开始复制选中类型"""
        if self._busy:
            return
        source = self.source_directory.get().strip()
        destination = self.target_directory.get().strip()
        if not source or not os.path.isdir(source):
            self._warn("select_existing_source")
            return
        if not destination:
            self._warn("select_destination")
            return
        selected = self.selection.selected_extensions()
        if not selected:
            self._warn("select_at_least_one_type")
            return

        self.status_text.set(t("copying", "messages"))
        self._set_busy(True)
        threading.Thread(target=self._copy_worker, args=(source, destination, selected), daemon=True).start()

    def _copy_worker(self, source: str, destination: str, selected):
        try:
            outcome = copy_files(source, destination, selected,
                                 max_workers=self.settings.max_workers,
                                 follow_symlinks=self.settings.follow_symlinks)
        except (InvalidInputError, OperationError) as e:
            error_msg = e.message if isinstance(e, OperationError) else str(e)
            logger.error(f"复制失败: {error_msg}")
            self.root.after(0, lambda: self._show_error("copy_failed", error_msg))
        except Exception as e:
            error_msg = str(e)
            logger.exception(f"复制时发生意外错误: {error_msg}")
            self.root.after(0, lambda: self._show_error("copy_failed", error_msg))
        else:
            self.root.after(0, lambda: self._show_copy_results(outcome))
        finally:
            self.root.after(0, lambda: self._set_busy(False))

    def _show_copy_results(self, outcome):
        if outcome.has_failures:
            for path, message in outcome.failures:
                logger.info(f"未复制: {path} ({message})")
            messagebox.showwarning(t("warning", "messages"), t("some_files_failed", "messages"),
                                   parent=self.root)
        self.status_text.set(t("files_copied", "messages", count=outcome.succeeded))

    def _show_error(self, key: str, error_msg: str):
        messagebox.showerror(t("error", "messages"), t(key, "messages", error=error_msg), parent=self.root)
        self.status_text.set(t("error_status", "messages"))

    # 主题

    def _poll_system_theme(self):
        self.theme.set(detect_light_theme())
        self.root.after(THEME_POLL_MS, self._poll_system_theme)

    def _on_theme_changed(self, is_light: bool):
        self.root.style.theme_use(self.theme.themename)

    def on_close(self):
        """保存最近使用的目录并退出"""
        self.settings.last_source = self.source_directory.get().strip()
        self.settings.last_destination = self.target_directory.get().strip()
        try:
            save_settings(self.settings)
        except OSError as e:
            logger.warning(f"保存应用设置失败: {e}")
        self.theme.unsubscribe(self._on_theme_changed)
        self.root.destroy()

    def run(self):
        """运行应用"""
        self.root.mainloop()


def main():
    """主函数"""
    setup_logging()
    app = SortFilesGUI()
    app.run()


if __name__ == "__main__":
    main()
