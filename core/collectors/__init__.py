"""
数据采集层模块

提供数据采集器的基类和K线采集器
"""

from core.collectors.base import BaseCollector
from core.collectors.kline import KlineCollector, KLINE_TYPES

__all__ = [
    "BaseCollector",
    "KlineCollector",
    "KLINE_TYPES",
]
