"""
数据转换层模块

提供行映射器和 Excel 表格转换器
"""

from core.transformers.base import BaseTransformer
from core.transformers.stock_row import StockRowTransformer
from core.transformers.spreadsheet import SpreadsheetTransformer

__all__ = [
    "BaseTransformer",
    "StockRowTransformer",
    "SpreadsheetTransformer",
]
