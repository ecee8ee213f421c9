"""
HTML 表格提取器

从粘贴的 HTML 中提取表格行，处理双表合并、列过滤，并拆分股票列中的名称和代码。
每个处理阶段都返回新的行结构，不修改上一阶段的结果。
"""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag
from loguru import logger

from core.common.exceptions import EmptyTable, NoTableFound
from utils.date_helper import DateHelper
from utils.stock_code_helper import StockCodeHelper

Row = Tuple[str, ...]
Rows = Tuple[Row, ...]

DEFAULT_DROP_LABELS = ('所属概念', '股票市场类型')
MERGED_DATE_LABEL = '日期'
DATE_LABELS = ('T日', MERGED_DATE_LABEL)
STOCK_LABEL = '股票'
CODE_LABEL = '代码'

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class Table:
    """提取结果：index 从 1 开始，rows 第一行为表头"""
    index: int
    rows: Rows
    merged: bool = False

    @property
    def header(self) -> Row:
        return self.rows[0] if self.rows else ()

    def data_rows(self) -> List[List[str]]:
        """表头之后的行，可直接作为位置行导入"""
        return [list(row) for row in self.rows[1:]]

    def to_dict(self) -> dict:
        return {
            'index': self.index,
            'rows': [list(row) for row in self.rows],
            'merged': self.merged,
        }


class HtmlTableExtractor:
    """
    HTML 表格提取器

    处理流程：
    1. 读取每个 <table> 的 <tr>，单元格文本去首尾空白并合并连续空白，跳过全空行
    2. 恰好两个表格时：合并 -> 过滤列 -> 拆分股票列；否则每个表格分别过滤列 -> 拆分股票列
    3. 过滤后没有行的表格被丢弃
    """

    def __init__(self, drop_labels: Optional[Iterable[str]] = None):
        self.drop_labels = frozenset(drop_labels if drop_labels is not None else DEFAULT_DROP_LABELS)

    def extract(self, html: str) -> List[Table]:
        """
        提取 HTML 中的全部表格

        Args:
            html: HTML 文本

        Returns:
            Table 列表

        Raises:
            NoTableFound: HTML 中没有 <table>
            EmptyTable: 所有表格都没有有效数据
        """
        soup = BeautifulSoup(html or '', 'html.parser')
        table_tags = soup.find_all('table')
        if not table_tags:
            raise NoTableFound("未找到表格数据")

        raw_tables = [rows for rows in (self._read_table(tag) for tag in table_tags) if rows]
        if not raw_tables:
            raise EmptyTable("表格中没有有效数据")
        logger.debug(f"找到 {len(table_tags)} 个表格，其中 {len(raw_tables)} 个有数据")

        if len(raw_tables) == 2:
            merged = self.merge_tables(raw_tables[0], raw_tables[1])
            candidates = [(1, self.decorate_stock_column(self.filter_columns(merged)), True)]
        else:
            candidates = [
                (index, self.decorate_stock_column(self.filter_columns(rows)), False)
                for index, rows in enumerate(raw_tables, start=1)
            ]

        tables = [Table(index=index, rows=rows, merged=merged)
                  for index, rows, merged in candidates if _has_content(rows)]
        if not tables:
            raise EmptyTable("过滤后表格中没有有效数据")

        logger.info(f"HTML 解析完成: {len(tables)} 个表格, 合并: {tables[0].merged}")
        return tables

    @staticmethod
    def _read_table(table: Tag) -> Rows:
        rows: List[Row] = []
        for tr in table.find_all('tr'):
            cells = tuple(_cell_text(cell) for cell in tr.find_all(['th', 'td']))
            if cells and any(cell.strip() for cell in cells):
                rows.append(cells)
        return tuple(rows)

    @staticmethod
    def merge_tables(first: Rows, second: Rows) -> Rows:
        """
        将第二个表格作为前导列合并到第一个表格

        合并后每行为 [日期, 第二个表格该行的单元格(空格连接), *第一个表格该行]。
        表头行的日期位置为 "日期"，数据行为从第一个表格表头倒数第二列提取的日期。
        """
        date_value = ''
        if first and len(first[0]) >= 2:
            date_value = DateHelper.extract_date_from_header(first[0][-2])

        merged: List[Row] = []
        for index in range(max(len(first), len(second))):
            second_row = second[index] if index < len(second) else ()
            leading = ' '.join(cell for cell in second_row if cell.strip()).strip()
            first_row = first[index] if index < len(first) else ()
            date_cell = MERGED_DATE_LABEL if index == 0 else date_value
            merged.append((date_cell, leading) + tuple(first_row))
        return tuple(merged)

    def filter_columns(self, rows: Rows) -> Rows:
        """删除表头等于过滤标签的列"""
        if not rows:
            return rows
        drop = {index for index, cell in enumerate(rows[0]) if cell.strip() in self.drop_labels}
        if not drop:
            return rows
        return tuple(
            tuple(cell for index, cell in enumerate(row) if index not in drop)
            for row in rows
        )

    @staticmethod
    def decorate_stock_column(rows: Rows) -> Rows:
        """
        拆分股票列

        找到表头中的 "股票" 和 "T日"/"日期" 列后：
        - 没有 "代码" 列时在日期列后插入一列
        - 每个数据行的股票单元格改为名称，代码单元格写入解析出的代码
        - 数据行的日期单元格做中文日期转换
        找不到股票列或日期列时原样返回。
        """
        if not rows:
            return rows

        header = rows[0]
        date_index = _find(header, DATE_LABELS)
        stock_index = _find(header, (STOCK_LABEL,))
        if date_index is None or stock_index is None:
            return rows

        code_index = _find(header, (CODE_LABEL,))
        inserted = code_index is None
        if inserted:
            code_index = date_index + 1
            header = header[:code_index] + (CODE_LABEL,) + header[code_index:]

        decorated: List[Row] = [header]
        for row in rows[1:]:
            stock_value = row[stock_index] if stock_index < len(row) else ''
            parsed = StockCodeHelper.parse_composite_name_code(stock_value)

            cells = list(row)
            if inserted:
                cells.insert(code_index, parsed.code)
            else:
                _set_cell(cells, code_index, parsed.code)

            _set_cell(cells, _shifted(stock_index, code_index, inserted), parsed.name)

            new_date_index = _shifted(date_index, code_index, inserted)
            if new_date_index < len(cells) and cells[new_date_index]:
                cells[new_date_index] = DateHelper.convert_chinese_date(cells[new_date_index])

            decorated.append(tuple(cells))
        return tuple(decorated)


def _cell_text(cell: Tag) -> str:
    text = _WHITESPACE.sub(' ', cell.get_text().strip())
    if not text:
        text = cell.get('data-value') or cell.get('value') or ''
    return text


def _find(header: Sequence[str], labels: Sequence[str]) -> Optional[int]:
    for index, cell in enumerate(header):
        if cell.strip() in labels:
            return index
    return None


def _shifted(index: int, code_index: int, inserted: bool) -> int:
    """插入代码列后，原来位于插入点及之后的列右移一位"""
    return index + 1 if inserted and index >= code_index else index


def _set_cell(cells: List[str], index: int, value: str):
    if index >= len(cells):
        cells.extend([''] * (index + 1 - len(cells)))
    cells[index] = value


def _has_content(rows: Rows) -> bool:
    return any(any(cell.strip() for cell in row) for row in rows)
