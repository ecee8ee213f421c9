"""
加载器基类模块

定义所有数据加载器的抽象基类
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from loguru import logger

from core.common.exceptions import ConfigException


class BaseLoader(ABC):
    """
    加载器抽象基类

    所有数据加载器都应该继承此类并实现 load 方法。
    基类持有存储句柄和批量大小等通用配置。
    """

    DEFAULT_BATCH_SIZE = 50

    def __init__(self, storage: Any, config: Optional[Dict[str, Any]] = None):
        """
        初始化加载器

        Args:
            storage: 存储实例，需提供 connection() 上下文管理器
            config: 加载器配置字典，包含 batch_size 等配置

        Raises:
            ConfigException: batch_size 不是正整数
        """
        self.storage = storage
        self.config = config or {}
        self.batch_size = int(self.config.get("batch_size", self.DEFAULT_BATCH_SIZE))
        if self.batch_size <= 0:
            raise ConfigException(f"batch_size 必须为正整数，当前为 {self.batch_size}")
        logger.debug(f"初始化加载器: {self.__class__.__name__}, 批量大小: {self.batch_size}")

    @abstractmethod
    def load(self, data: Any) -> Any:
        """
        加载数据到数据库的核心方法

        Args:
            data: 待加载的数据

        Raises:
            LoaderException: 当加载失败时抛出异常
        """
        pass
