"""
SQLite 数据库表结构定义

stock_data 的建表语句由 core.models.schema 中唯一的列定义生成，这里不再重复列名。

注意：
- id 为自增主键，由数据库分配
- (T日, 代码) 是业务上的去重键，但表上没有唯一约束，也没有额外索引
"""

from core.models.schema import STOCK_DATA_SCHEMA, TABLE_NAME

# ==================== Stock Data Table ====================
STOCK_DATA_TABLE = STOCK_DATA_SCHEMA.create_table_sql()

STOCK_DATA_INSERT = STOCK_DATA_SCHEMA.insert_sql()

STOCK_DATA_EXISTS = (
    f'SELECT COUNT(*) FROM {TABLE_NAME} '
    f'WHERE "{STOCK_DATA_SCHEMA.date_field.name}" = ? AND "{STOCK_DATA_SCHEMA.code_field.name}" = ?'
)

STOCK_DATA_MAX_ID = f"SELECT MAX(id) FROM {TABLE_NAME}"

STOCK_DATA_SELECT_ALL = f"SELECT * FROM {TABLE_NAME} ORDER BY id"

STOCK_DATA_COUNT = f"SELECT COUNT(*) FROM {TABLE_NAME}"

STOCK_DATA_CLEAR = f"DELETE FROM {TABLE_NAME}"

# 重置自增 id，下次插入从 1 开始
STOCK_DATA_RESET_SEQUENCE = f"DELETE FROM sqlite_sequence WHERE name = '{TABLE_NAME}'"

STOCK_DATA_TABLE_DDL = f"SELECT sql FROM sqlite_master WHERE type = 'table' AND name = '{TABLE_NAME}'"

STOCK_DATA_DROP = f"DROP TABLE IF EXISTS {TABLE_NAME}"
