"""
数据模型模块

提供列定义、规范记录和K线数据模型
"""

from core.models.schema import (
    ColumnSpec,
    StockDataSchema,
    STOCK_DATA_SCHEMA,
    TABLE_NAME,
    build_stock_data_schema,
)
from core.models.stock_data import (
    CanonicalRecord,
    RejectReason,
    RowRejection,
    ImportResult,
    QueryResult,
)
from core.models.kline import KlineBar

__all__ = [
    "ColumnSpec",
    "StockDataSchema",
    "STOCK_DATA_SCHEMA",
    "TABLE_NAME",
    "build_stock_data_schema",
    "CanonicalRecord",
    "RejectReason",
    "RowRejection",
    "ImportResult",
    "QueryResult",
    "KlineBar",
]
