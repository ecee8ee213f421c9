"""
数据加载层模块

提供数据加载器的基类和股票数据导入器
"""

from core.loaders.base import BaseLoader
from core.loaders.stock_data import StockDataLoader

__all__ = [
    "BaseLoader",
    "StockDataLoader",
]
