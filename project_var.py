#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
项目变量定义
统一管理项目中使用的各种路径和常量
"""

import os

# 获取当前文件的绝对路径
CURRENT_FILE = os.path.abspath(__file__)
# 获取项目根目录
PROJECT_DIR = os.path.dirname(CURRENT_FILE)

# 数据存储目录（SQLite 数据库文件所在目录）
DATA_DIR = os.path.join(PROJECT_DIR, "data")

# 日志目录
LOG_DIR = os.path.join(PROJECT_DIR, "logs")

# 默认的 Excel 导入文件
DEFAULT_EXCEL_PATH = os.path.join(PROJECT_DIR, "public", "stock_data.xlsx")
