"""
内存表格视图

对查询结果做表头排序、行筛选和行排序，供查看脚本使用
"""

import re
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Optional, Sequence

from core.common.exceptions import ValidationException
from core.transformers.stock_row import coerce_cell, is_empty
from utils.date_helper import DateHelper

FIXED_COLUMNS = ('T日', '代码', '股票')
PRIORITY_COLUMNS = ('T加1最大涨幅', 'T成交量除T减1成交量', 'T换手率', 'T涨幅', 'T振幅')

NUMBER_OPERATORS = ('eq', 'ne', 'gt', 'ge', 'lt', 'le', 'range')
TEXT_OPERATORS = ('contains', 'not_contains')

# 表达式中的符号 -> 运算符，长符号在前
_SYMBOL_OPERATORS = (
    ('!~', 'not_contains'),
    ('>=', 'ge'),
    ('<=', 'le'),
    ('!=', 'ne'),
    ('~', 'contains'),
    ('=', 'eq'),
    ('>', 'gt'),
    ('<', 'lt'),
)
_RANGE_PATTERN = re.compile(r"^(?P<min>[^.]*(?:\.\d+)?)\.\.(?P<max>.*)$")


def to_number(value: Any) -> Optional[float]:
    """能完整解析为有限数字时返回 float，否则返回 None"""
    if is_empty(value):
        return None
    number = coerce_cell(value)
    return number if isinstance(number, float) else None


@dataclass(frozen=True)
class ColumnFilter:
    """
    单列筛选条件

    数字运算符使用 value（range 使用 min/max），文本运算符使用 value。
    值为空字符串的条件不生效。
    """
    column: str
    operator: str
    value: str = ''
    min: str = ''
    max: str = ''

    def __post_init__(self):
        if self.operator not in NUMBER_OPERATORS + TEXT_OPERATORS:
            raise ValidationException(f"不支持的筛选运算符: {self.operator}")

    @property
    def is_text(self) -> bool:
        return self.operator in TEXT_OPERATORS

    def matches(self, row: Dict[str, Any]) -> bool:
        cell = row.get(self.column)
        if self.is_text:
            return self._match_text(cell)
        return self._match_number(cell)

    def _match_text(self, cell: Any) -> bool:
        needle = self.value.lower()
        if not needle:
            return True
        haystack = '' if cell is None else str(cell).lower()
        if self.operator == 'not_contains':
            return needle not in haystack
        return needle in haystack

    def _match_number(self, cell: Any) -> bool:
        if self.operator == 'range':
            if self.min == '' and self.max == '':
                return True
        elif self.value == '':
            return True

        number = to_number(cell)
        if number is None:
            return False

        if self.operator == 'range':
            min_ok = self.min == '' or number >= self._operand(self.min)
            max_ok = self.max == '' or number <= self._operand(self.max)
            return min_ok and max_ok

        target = self._operand(self.value)
        return {
            'eq': number == target,
            'ne': number != target,
            'gt': number > target,
            'ge': number >= target,
            'lt': number < target,
            'le': number <= target,
        }[self.operator]

    def _operand(self, text: str) -> float:
        number = to_number(text)
        if number is None:
            raise ValidationException(f"筛选值不是数字: {self.column} {self.operator} {text!r}")
        return number

    @classmethod
    def parse(cls, expression: str) -> "ColumnFilter":
        """
        解析筛选表达式

        支持 `列>=值`、`列<值`、`列=值`、`列!=值`、`列~文本`、`列!~文本`，
        以及区间 `列=最小..最大`（任一端可为空）。

        Args:
            expression: 筛选表达式，如 "T换手率>=5"、"股票~科技"、"T涨幅=1..3"

        Returns:
            ColumnFilter

        Raises:
            ValidationException: 表达式无法解析
        """
        text = expression.strip()
        for symbol, operator in _SYMBOL_OPERATORS:
            position = text.find(symbol)
            if position <= 0:
                continue
            column = text[:position].strip()
            value = text[position + len(symbol):].strip()
            if operator == 'eq':
                match = _RANGE_PATTERN.match(value)
                if match:
                    return cls(column, 'range', min=match.group('min').strip(), max=match.group('max').strip())
            return cls(column, operator, value=value)
        raise ValidationException(f"无法解析筛选表达式: {expression!r}")


class TableView:
    """
    以表头为键的行的内存视图

    筛选和排序都返回新列表，不修改传入的行。
    """

    def __init__(self, headers: Sequence[str], rows: Sequence[Dict[str, Any]]):
        self.headers = list(headers)
        self.rows = list(rows)

    def ordered_headers(self) -> List[str]:
        """固定列在前，其次是优先列（按固定优先级），最后是其余列（保持原顺序）"""
        fixed = [header for header in self.headers if header in FIXED_COLUMNS]
        priority = [column for column in PRIORITY_COLUMNS if column in self.headers]
        others = [header for header in self.headers
                  if header not in FIXED_COLUMNS and header not in PRIORITY_COLUMNS]
        return fixed + priority + others

    def column_type(self, header: str, sample_size: int = 10) -> str:
        """取前 sample_size 行的非空值，超过一半是数字时为 number，否则为 text"""
        samples = [row.get(header) for row in self.rows[:sample_size]]
        samples = [value for value in samples if not is_empty(value)]
        if not samples:
            return 'text'
        numeric = sum(1 for value in samples if to_number(value) is not None)
        return 'number' if numeric / len(samples) > 0.5 else 'text'

    def filter(self, filters: Iterable[ColumnFilter]) -> List[Dict[str, Any]]:
        result = list(self.rows)
        for column_filter in filters:
            if column_filter.column not in self.headers:
                raise ValidationException(f"未知列: {column_filter.column}")
            result = [row for row in result if column_filter.matches(row)]
        return result

    def sort(self, rows: Sequence[Dict[str, Any]], key: str, descending: bool = False) -> List[Dict[str, Any]]:
        """
        排序

        T日 两边都能解析为日期时按日期比较；两边都是数字时按数值比较；
        否则按字符串比较。排序是稳定的。
        """
        if key not in self.headers:
            raise ValidationException(f"未知列: {key}")

        def compare(a: Dict[str, Any], b: Dict[str, Any]) -> int:
            left, right = a.get(key), b.get(key)
            if key == 'T日':
                left_date = DateHelper.parse_to_date(left)
                right_date = DateHelper.parse_to_date(right)
                if left_date is not None and right_date is not None:
                    return _sign((left_date - right_date).days)

            left_number, right_number = to_number(left), to_number(right)
            if left_number is not None and right_number is not None:
                return _sign(left_number - right_number)

            left_text = '' if is_empty(left) else str(left)
            right_text = '' if is_empty(right) else str(right)
            return _sign((left_text > right_text) - (left_text < right_text))

        return sorted(rows, key=cmp_to_key(compare), reverse=descending)

    def apply(
        self,
        filters: Iterable[ColumnFilter] = (),
        sort_key: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        """先筛选再排序"""
        rows = self.filter(filters)
        if sort_key:
            rows = self.sort(rows, sort_key, descending)
        return rows


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)
