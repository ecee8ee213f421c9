#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
HTML表格解析API接口
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from core.common.exceptions import ValidationException
from core.extractors.html_table import HtmlTableExtractor
from src.server.dependencies import get_html_extractor

# 创建路由
router = APIRouter()


@router.post("/html/parse")
def parse_html(
    html: Any = Body(None, embed=True, description="包含 <table> 的 HTML 文本"),
    extractor: HtmlTableExtractor = Depends(get_html_extractor),
):
    """
    解析 HTML 中的表格，返回可直接导入的行
    """
    if not isinstance(html, str) or not html.strip():
        raise ValidationException("请输入HTML代码")

    tables = extractor.extract(html)
    return {"success": True, "tables": [table.to_dict() for table in tables]}
