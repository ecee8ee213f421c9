"""
股票数据行映射器

把一行原始数据（35 个位置值，或以表头为键的字典）转换为 36 个字段的规范记录
"""

import math
import re
from typing import Any, List, Mapping, Optional, Sequence, Tuple, Union

from loguru import logger

from core.common.utils import compute_ratio
from core.models.stock_data import CanonicalRecord, CellValue, RejectReason, RowRejection
from core.transformers.base import BaseTransformer

RawRow = Union[Sequence[Any], Mapping[str, Any]]
MapResult = Union[CanonicalRecord, RowRejection]

# 与 JavaScript Number() 一致的十进制数字格式（不接受 "1_000"、"inf" 等 Python 特有写法）
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def is_empty(value: Any) -> bool:
    """None / NaN / 空白字符串视为空值"""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value.strip() == ''


def to_key_text(value: Any) -> str:
    """将 T日 / 代码 的原始值转换为字符串（整数值的浮点数不带 .0）"""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def coerce_cell(value: Any) -> CellValue:
    """
    转换普通字段的值：空值 -> None，能完整解析为有限数字的 -> float，其余 -> 去空白的字符串
    """
    if is_empty(value):
        return None
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else str(value)

    text = str(value).strip()
    if _NUMBER_PATTERN.match(text):
        number = float(text)
        if math.isfinite(number):
            return number
    return text


class StockRowTransformer(BaseTransformer):
    """
    行映射器

    无状态的逐行转换，每行只有两种结果：CanonicalRecord 或 RowRejection。
    - 第 0 位为 T日、第 1 位为代码，强制为字符串，为空时拒绝（MissingKey）
    - 第 2~34 位按数字解析，解析失败保留原字符串
    - 不足 35 位的补 None
    - 第 36 个字段 = 原始行的 dividend_field / divisor_field（支持 万/亿 单位）
    - 结果字段数与列定义不一致时拒绝（SchemaMismatch）
    """

    def map_row(self, raw_row: RawRow, row_index: Optional[int] = None) -> MapResult:
        """
        映射单行数据

        Args:
            raw_row: 位置行（list/tuple）或以表头为键的字典
            row_index: 行号，只用于日志和拒绝结果

        Returns:
            CanonicalRecord 或 RowRejection
        """
        if isinstance(raw_row, Mapping):
            raw_row = self.to_positional(raw_row)
        elif isinstance(raw_row, (str, bytes)) or not isinstance(raw_row, Sequence):
            return RowRejection(
                reason=RejectReason.SCHEMA_MISMATCH,
                row_index=row_index,
                detail=f"不支持的行类型: {type(raw_row).__name__}",
            )

        schema = self.schema
        direct_width = schema.direct_width

        if len(raw_row) > direct_width:
            return RowRejection(
                reason=RejectReason.SCHEMA_MISMATCH,
                row_index=row_index,
                detail=f"字段数 {len(raw_row)} 超过 {direct_width}",
            )

        trade_date = raw_row[schema.date_field.index] if len(raw_row) > schema.date_field.index else None
        code = raw_row[schema.code_field.index] if len(raw_row) > schema.code_field.index else None
        if is_empty(trade_date) or is_empty(code):
            return RowRejection(
                reason=RejectReason.MISSING_KEY,
                row_index=row_index,
                detail=f"日期或代码为空: date={trade_date!r}, code={code!r}",
            )

        values: List[CellValue] = [to_key_text(trade_date), to_key_text(code)]
        for position in range(len(values), direct_width):
            values.append(coerce_cell(raw_row[position]) if position < len(raw_row) else None)

        # 比值使用原始值计算（原始值可能带 万/亿 单位）
        values.append(compute_ratio(
            self._raw_value(raw_row, schema.dividend_field.index),
            self._raw_value(raw_row, schema.divisor_field.index),
        ))

        if len(values) != schema.width:
            return RowRejection(
                reason=RejectReason.SCHEMA_MISMATCH,
                row_index=row_index,
                detail=f"字段数 {len(values)} 与列定义 {schema.width} 不一致",
            )

        return CanonicalRecord(values=tuple(values), schema=schema)

    def to_positional(self, row: Mapping[str, Any]) -> List[Any]:
        """
        将以表头为键的字典转换为位置行

        表头可以是规范字段名或旧表头；无法识别的表头和计算字段会被忽略。

        Args:
            row: 以表头为键的字典

        Returns:
            长度为 35 的位置行
        """
        positional: List[Any] = [None] * self.schema.direct_width
        for header, value in row.items():
            name = self.schema.canonical_name(header)
            if name is None:
                continue
            index = self.schema.column(name).index
            if index < self.schema.direct_width:
                positional[index] = value
        return positional

    def transform(self, data: Sequence[RawRow]) -> Tuple[List[CanonicalRecord], List[RowRejection]]:
        """
        批量映射

        Args:
            data: 原始行列表

        Returns:
            (规范记录列表, 拒绝结果列表)
        """
        records: List[CanonicalRecord] = []
        rejections: List[RowRejection] = []

        for row_index, raw_row in enumerate(data):
            result = self.map_row(raw_row, row_index)
            if isinstance(result, RowRejection):
                logger.warning(f"跳过行 {row_index}: {result.reason.value} {result.detail}")
                rejections.append(result)
            else:
                records.append(result)

        logger.info(f"行映射完成: 成功 {len(records)} 条, 拒绝 {len(rejections)} 条")
        return records, rejections

    @staticmethod
    def _raw_value(raw_row: Sequence[Any], index: int) -> Any:
        return raw_row[index] if index < len(raw_row) else None
