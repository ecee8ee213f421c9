#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
API Server配置文件
"""

from pydantic_settings import BaseSettings
from typing import List, Optional


class ServerConfig(BaseSettings):
    """
    API Server配置，可通过环境变量或 .env 覆盖
    """
    # 服务器配置
    HOST: str = "0.0.0.0"
    PORT: int = 8887
    DEBUG: bool = False

    # 限流配置
    RATE_LIMIT: str = "100/minute"

    # 日志配置
    LOG_LEVEL: str = "INFO"

    # 数据库配置
    DB_NAME: str = "stock_data.db"
    DATA_PATH: Optional[str] = None  # 为空时使用项目 data 目录
    IMPORT_BATCH_SIZE: int = 50

    # 跨域配置，逗号分隔
    CORS_ORIGINS: str = "*"

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        """
        配置类
        """
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# 创建配置实例
config = ServerConfig()
