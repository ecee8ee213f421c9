#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
接口依赖：存储实例在进程内只创建一次，各请求通过 connection() 获取并释放连接
"""

from functools import lru_cache

from core.collectors.kline import KlineCollector
from core.extractors.html_table import HtmlTableExtractor
from src.server.config import config
from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite


@lru_cache(maxsize=1)
def get_storage() -> StockDataStorageSQLite:
    return StockDataStorageSQLite(db_name=config.DB_NAME, data_dir=config.DATA_PATH)


@lru_cache(maxsize=1)
def get_kline_collector() -> KlineCollector:
    return KlineCollector()


def get_html_extractor() -> HtmlTableExtractor:
    return HtmlTableExtractor()
