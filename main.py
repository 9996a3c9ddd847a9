#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
SortFiles 主入口文件

启动按扩展名分类与批量复制工具的主界面。
"""

import sys
import os

# 添加src目录到Python路径
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from sortfiles.gui.main_window import main

if __name__ == "__main__":
    main()
