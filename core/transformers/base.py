"""
转换器基类模块

定义所有数据转换器的抽象基类
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
import pandas as pd
from loguru import logger

from core.models.schema import STOCK_DATA_SCHEMA, StockDataSchema


class BaseTransformer(ABC):
    """
    转换器抽象基类

    所有数据转换器都应该继承此类并实现 transform 方法。
    基类持有列定义和配置，并提供 DataFrame 层面的通用清洗方法。
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, schema: StockDataSchema = STOCK_DATA_SCHEMA):
        """
        初始化转换器

        Args:
            config: 转换器配置字典
            schema: 列定义，默认使用进程内唯一的 STOCK_DATA_SCHEMA
        """
        self.config = config or {}
        self.schema = schema
        logger.debug(f"初始化转换器: {self.__class__.__name__}")

    @abstractmethod
    def transform(self, data: Any) -> Any:
        """
        转换数据的核心方法

        Args:
            data: 原始数据

        Returns:
            转换后的数据

        Raises:
            TransformerException: 当转换失败时抛出异常
        """
        pass

    def _rename_columns(self, data: pd.DataFrame, column_mapping: Dict[str, str]) -> pd.DataFrame:
        """
        重命名列

        Args:
            data: 待转换的数据
            column_mapping: 列名映射字典 {旧列名: 新列名}

        Returns:
            pd.DataFrame: 重命名后的数据
        """
        if data is None or data.empty:
            return data

        # 只重命名存在且确实需要改名的列
        existing_mapping = {
            old: new for old, new in column_mapping.items()
            if old in data.columns and old != new
        }

        if existing_mapping:
            data = data.rename(columns=existing_mapping)
            logger.debug(f"重命名列: {existing_mapping}")

        return data

    def _drop_empty_rows(self, data: pd.DataFrame) -> pd.DataFrame:
        """
        删除所有单元格都为空（None / NaN / 空白字符串）的行

        Args:
            data: 待处理的数据

        Returns:
            pd.DataFrame: 处理后的数据
        """
        if data is None or data.empty:
            return data

        initial_count = len(data)
        blank = data.apply(lambda column: column.map(_is_blank))
        data = data[~blank.all(axis=1)].reset_index(drop=True)

        if len(data) < initial_count:
            logger.debug(f"删除空行: 从 {initial_count} 条减少到 {len(data)} 条")

        return data


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ''
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False
