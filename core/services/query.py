"""
股票数据查询服务

读出全部记录并转换为以规范表头为键的行
"""

from typing import Any, Dict, List

from loguru import logger

from core.models.schema import STOCK_DATA_SCHEMA, StockDataSchema
from core.models.stock_data import QueryResult


class StockQueryService:
    """
    全量查询服务

    - 按 id 升序返回全部记录，不分页、不在服务端筛选
    - 表头为列定义中的规范字段顺序（不含 id）
    - 空值统一返回空字符串
    """

    def __init__(self, storage: Any, schema: StockDataSchema = STOCK_DATA_SCHEMA):
        self.storage = storage
        self.schema = schema

    def query_all(self) -> QueryResult:
        """
        查询全部记录

        Returns:
            QueryResult: headers 为规范表头，rows 为以表头为键的字典列表
        """
        headers = list(self.schema.names)
        stored_rows = self.storage.fetch_all()
        rows = [self._to_display_row(row, headers) for row in stored_rows]
        logger.info(f"查询完成: {len(rows)} 条记录")
        return QueryResult(headers=headers, rows=rows)

    @staticmethod
    def _to_display_row(row: Dict[str, Any], headers: List[str]) -> Dict[str, Any]:
        display: Dict[str, Any] = {}
        for header in headers:
            value = row.get(header)
            display[header] = '' if value is None else value
        return display
