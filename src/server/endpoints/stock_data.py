#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
股票数据导入 / 查询API接口
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from loguru import logger

from core.loaders.stock_data import StockDataLoader
from core.services.query import StockQueryService
from src.server.config import config
from src.server.dependencies import get_storage
from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite

# 创建路由
router = APIRouter()


@router.post("/import")
def import_stock_data(
    data: Any = Body(None, embed=True, description="位置行数组，每行最多 35 个值"),
    storage: StockDataStorageSQLite = Depends(get_storage),
):
    """
    批量导入股票数据，按 (T日, 代码) 跳过已存在的记录
    """
    logger.info(f"收到导入请求，行数：{len(data) if isinstance(data, list) else 'N/A'}")
    loader = StockDataLoader(storage, config={"batch_size": config.IMPORT_BATCH_SIZE})
    result = loader.load(data)
    return {"success": True, **result.to_dict()}


@router.get("/query")
def query_stock_data(storage: StockDataStorageSQLite = Depends(get_storage)):
    """
    查询全部股票数据
    """
    result = StockQueryService(storage).query_all()
    return {"success": True, "headers": result.headers, "data": result.rows}
