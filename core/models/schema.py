"""
stock_data 表字段定义

整个项目只有这一份列定义：字段顺序、SQL 类型、是否可空，以及旧表头到新表头的映射。
行映射、建表语句、查询结果的表头都从这里读取。
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

TABLE_NAME = "stock_data"
IDENTITY_COLUMN = "id"

SQL_TEXT = "TEXT"
SQL_REAL = "REAL"


@dataclass(frozen=True)
class ColumnSpec:
    """单个字段的描述"""
    name: str  # 规范字段名
    index: int  # 在规范记录中的位置（从 0 开始）
    sql_type: str  # TEXT / REAL
    nullable: bool = True
    legacy_name: Optional[str] = None  # Excel 旧表头

    @property
    def is_numeric(self) -> bool:
        return self.sql_type == SQL_REAL


# (规范字段名, SQL 类型, 旧表头)
_COLUMN_DEFINITIONS: Tuple[Tuple[str, str, str], ...] = (
    ("T日", SQL_TEXT, "T日"),
    ("代码", SQL_TEXT, "代码"),
    ("股票", SQL_TEXT, "股票"),
    ("现价_元", SQL_REAL, "现价_元"),
    ("T减1收盘价", SQL_REAL, "T_1收盘价"),
    ("T减2的MA5", SQL_REAL, "T_2_MA5"),
    ("T减2的MA10", SQL_REAL, "T_2_MA10"),
    ("T减2的MA20", SQL_REAL, "T_2_MA20"),
    ("T减1的MA5", SQL_REAL, "T_1_MA5"),
    ("T减1的MA10", SQL_REAL, "T_1_MA10"),
    ("T减1的MA20", SQL_REAL, "T_1_MA20"),
    ("T的MA5", SQL_REAL, "T_MA5"),
    ("T的MA10", SQL_REAL, "T_MA10"),
    ("T的MA20", SQL_REAL, "T_MA20"),
    ("T减1收盘价减MA5", SQL_REAL, "T_1收盘价_MA5"),
    ("T减1涨幅", SQL_REAL, "T_1涨幅"),
    ("T涨幅", SQL_REAL, "T涨幅"),
    ("T最低价", SQL_REAL, "T最低价"),
    ("T最低价减MA5", SQL_REAL, "T最低价_MA5"),
    ("T减2成交量_股", SQL_TEXT, "T_2成交量_股"),
    ("T减1成交量_股", SQL_TEXT, "T_1成交量_股"),
    ("T成交量_股", SQL_TEXT, "T成交量_股"),
    ("涨跌幅", SQL_TEXT, "涨跌幅"),
    ("T减2的MA5减MA10", SQL_REAL, "T_2的MA5_MA10"),
    ("T减1的MA5减MA10", SQL_REAL, "T_1的MA5_MA10"),
    ("T的MA5减MA10", SQL_REAL, "T的MA5_MA10"),
    ("T减2的MA10减MA20", SQL_REAL, "T_2的MA10_MA20"),
    ("T减1的MA10减MA20", SQL_REAL, "T_1的MA10_MA20"),
    ("T的MA10减MA20", SQL_REAL, "T的MA10_MA20"),
    ("T减1开盘价", SQL_REAL, "T_1开盘价"),
    ("T减1开盘价减MA5", SQL_REAL, "T_1的开盘价_MA5"),
    ("T减1成交量除T减2成交量", SQL_REAL, "T_1成交量_T_2成交量"),
    ("T换手率", SQL_REAL, "T换手率"),
    ("T振幅", SQL_REAL, "T振幅"),
    ("T加1最大涨幅", SQL_REAL, "T_1的最大涨幅"),
    ("T成交量除T减1成交量", SQL_REAL, "T成交量_T_1成交量"),
)

# 非空字段（去重键）
_KEY_COLUMNS = ("T日", "代码")


@dataclass(frozen=True)
class StockDataSchema:
    """
    stock_data 表的规范列定义

    前 35 个字段由导入数据直接提供，第 36 个字段（T成交量除T减1成交量）
    由 dividend_field / divisor_field 计算得出。
    """
    columns: Tuple[ColumnSpec, ...]
    date_field: ColumnSpec
    code_field: ColumnSpec
    name_field: ColumnSpec
    dividend_field: ColumnSpec
    divisor_field: ColumnSpec
    ratio_field: ColumnSpec
    legacy_mapping: Mapping[str, str] = field(default_factory=dict)

    @property
    def names(self) -> List[str]:
        return [column.name for column in self.columns]

    @property
    def width(self) -> int:
        """规范记录的字段数（36）"""
        return len(self.columns)

    @property
    def direct_width(self) -> int:
        """导入数据直接提供的字段数（35）"""
        return self.ratio_field.index

    def column(self, name: str) -> ColumnSpec:
        """按规范字段名或旧表头查找字段"""
        canonical = self.canonical_name(name)
        if canonical is None:
            raise KeyError(name)
        return self.columns[self._index_by_name[canonical]]

    def canonical_name(self, header: str) -> Optional[str]:
        """
        将表头解析为规范字段名

        :param header: 规范字段名或旧表头（会去掉首尾空白）
        :return: 规范字段名，无法识别时返回 None
        """
        if header is None:
            return None
        header = str(header).strip()
        if header in self._index_by_name:
            return header
        return self.legacy_mapping.get(header)

    def create_table_sql(self) -> str:
        """生成 stock_data 建表语句（id 自增主键 + 36 个字段）"""
        column_defs = [f"{IDENTITY_COLUMN} INTEGER PRIMARY KEY AUTOINCREMENT"]
        for column in self.columns:
            definition = f'"{column.name}" {column.sql_type}'
            if not column.nullable:
                definition += " NOT NULL"
            column_defs.append(definition)
        joined = ",\n    ".join(column_defs)
        return f"CREATE TABLE IF NOT EXISTS {TABLE_NAME} (\n    {joined}\n)"

    def insert_sql(self) -> str:
        """生成插入语句（不含 id，id 由数据库自增）"""
        columns = ", ".join(f'"{name}"' for name in self.names)
        placeholders = ", ".join("?" for _ in self.columns)
        return f"INSERT INTO {TABLE_NAME} ({columns}) VALUES ({placeholders})"

    @property
    def _index_by_name(self) -> Dict[str, int]:
        return {column.name: column.index for column in self.columns}


def build_stock_data_schema() -> StockDataSchema:
    """根据列定义构建 StockDataSchema"""
    columns = tuple(
        ColumnSpec(
            name=name,
            index=index,
            sql_type=sql_type,
            nullable=name not in _KEY_COLUMNS,
            legacy_name=legacy_name,
        )
        for index, (name, sql_type, legacy_name) in enumerate(_COLUMN_DEFINITIONS)
    )
    by_name = {column.name: column for column in columns}
    legacy_mapping = MappingProxyType({column.legacy_name: column.name for column in columns})

    return StockDataSchema(
        columns=columns,
        date_field=by_name["T日"],
        code_field=by_name["代码"],
        name_field=by_name["股票"],
        dividend_field=by_name["T成交量_股"],
        divisor_field=by_name["T减1成交量_股"],
        ratio_field=by_name["T成交量除T减1成交量"],
        legacy_mapping=legacy_mapping,
    )


# 进程内唯一的列定义，启动时构建，运行期间不变
STOCK_DATA_SCHEMA = build_stock_data_schema()
