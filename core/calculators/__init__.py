"""
计算器模块

提供K线周期聚合
"""

from core.calculators.aggregator import Aggregator

__all__ = ['Aggregator']
