"""
存储模块初始化
使用SQLite存储
"""

from .sqlite_base import SQLiteBaseStorage
from .stock_data_storage_sqlite import StockDataStorageSQLite

__all__ = [
    "SQLiteBaseStorage",
    "StockDataStorageSQLite",
]
