"""
采集器基类模块

定义所有数据采集器的抽象基类
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import time
import pandas as pd
from loguru import logger

from core.common.exceptions import DataSourceException


class BaseCollector(ABC):
    """
    采集器抽象基类

    所有数据采集器都应该继承此类并实现 collect 方法。
    外部数据源失败时统一包装为 DataSourceException，不做自动重试。
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, provider: Any = None):
        """
        初始化采集器

        Args:
            config: 采集器配置字典
            provider: 数据源模块或对象（默认 akshare），测试时可替换
        """
        self.config = config or {}
        self.source = self.config.get("source", "akshare")
        self.provider = provider
        logger.debug(f"初始化采集器: {self.__class__.__name__}, 数据源: {self.source}")

    @abstractmethod
    def collect(self, **kwargs) -> pd.DataFrame:
        """
        采集数据的核心方法

        Returns:
            pd.DataFrame: 采集到的原始数据

        Raises:
            CollectorException: 当采集失败时抛出异常
        """
        pass

    def _call_source(self, func_name: str, **kwargs) -> pd.DataFrame:
        """
        调用数据源接口（单次调用，不重试）

        Args:
            func_name: 数据源函数名，如 stock_zh_a_daily
            **kwargs: 透传给数据源函数的参数

        Returns:
            pd.DataFrame: 数据源返回的数据

        Raises:
            DataSourceException: 调用失败时抛出异常
        """
        provider = self._get_provider()
        start_time = time.time()
        try:
            df = getattr(provider, func_name)(**kwargs)
        except Exception as e:
            elapsed = time.time() - start_time
            logger.error(f"数据源调用失败: {func_name}({kwargs}), 耗时: {elapsed:.3f}s, 错误: {e}")
            raise DataSourceException(f"获取K线数据失败: {e}") from e

        elapsed = time.time() - start_time
        logger.debug(f"数据源调用成功: {func_name}, 耗时: {elapsed:.3f}s, 行数: {0 if df is None else len(df)}")
        return df

    def _get_provider(self):
        """
        获取数据源

        Returns:
            数据源模块或对象

        Raises:
            DataSourceException: 不支持的数据源
        """
        if self.provider is not None:
            return self.provider

        if self.source == "akshare":
            import akshare as ak
            self.provider = ak
            return ak
        raise DataSourceException(f"不支持的数据源: {self.source}")
