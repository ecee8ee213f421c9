"""
股票数据模型

定义规范记录、行映射的拒绝原因、导入结果和查询结果
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

from core.models.schema import STOCK_DATA_SCHEMA, StockDataSchema

CellValue = Union[str, float, None]


@dataclass(frozen=True)
class CanonicalRecord:
    """
    规范记录

    stock_data 表中的一行（不含 id），字段顺序与 StockDataSchema 一致。
    由行映射器构造，入库后只读。
    """
    values: Tuple[CellValue, ...]
    schema: StockDataSchema = field(default=STOCK_DATA_SCHEMA, repr=False, compare=False)

    @property
    def trade_date(self) -> str:
        return self.values[self.schema.date_field.index]

    @property
    def code(self) -> str:
        return self.values[self.schema.code_field.index]

    @property
    def key(self) -> Tuple[str, str]:
        """去重键 (T日, 代码)"""
        return self.trade_date, self.code

    @property
    def volume_ratio(self) -> Optional[float]:
        return self.values[self.schema.ratio_field.index]

    def as_dict(self) -> Dict[str, CellValue]:
        return dict(zip(self.schema.names, self.values))


class RejectReason(str, Enum):
    """行映射失败的原因"""
    MISSING_KEY = "MissingKey"
    SCHEMA_MISMATCH = "SchemaMismatch"


@dataclass(frozen=True)
class RowRejection:
    """行映射失败的结构化结果"""
    reason: RejectReason
    row_index: Optional[int] = None
    detail: str = ""


@dataclass
class ImportResult:
    """一次批量导入的统计结果"""
    inserted: int = 0
    skipped: int = 0
    total: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            'inserted': self.inserted,
            'skipped': self.skipped,
            'total': self.total,
        }


@dataclass
class QueryResult:
    """全量查询结果：规范表头 + 以表头为键的行"""
    headers: List[str]
    rows: List[Dict[str, Any]]
