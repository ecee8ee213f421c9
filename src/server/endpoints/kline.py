#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
K线数据API接口
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from loguru import logger

from core.collectors.kline import KlineCollector
from core.common.exceptions import ValidationException
from core.models.kline import KlineBar
from src.server.dependencies import get_kline_collector

# 创建路由
router = APIRouter()


@router.get("/kline")
def get_kline(
    code: Optional[str] = Query(None, description="股票代码，如 sh600000、600000、600000.SH"),
    type: str = Query("day", description="K线类型：minute / day / week / month"),
    collector: KlineCollector = Depends(get_kline_collector),
):
    """
    获取单只股票的K线数据
    """
    if not code or not code.strip():
        raise ValidationException("缺少股票代码")

    logger.info(f"获取{code}的K线数据，类型：{type}")
    df = collector.collect(code.strip(), type)
    bars = KlineBar.from_dataframe(df)
    return {"success": True, "data": [bar.to_dict() for bar in bars]}
