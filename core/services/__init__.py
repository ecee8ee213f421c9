"""
服务层模块

提供全量查询服务和内存表格视图
"""

from core.services.query import StockQueryService
from core.services.table_view import ColumnFilter, TableView

__all__ = [
    "StockQueryService",
    "ColumnFilter",
    "TableView",
]
