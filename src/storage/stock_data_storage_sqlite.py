import sqlite3
from typing import Any, Dict, List, Optional
from loguru import logger
from .sqlite_base import SQLiteBaseStorage
from .sql_models import (
    STOCK_DATA_TABLE,
    STOCK_DATA_INSERT,
    STOCK_DATA_EXISTS,
    STOCK_DATA_SELECT_ALL,
    STOCK_DATA_COUNT,
    STOCK_DATA_CLEAR,
    STOCK_DATA_RESET_SEQUENCE,
    STOCK_DATA_TABLE_DDL,
    STOCK_DATA_DROP,
    STOCK_DATA_MAX_ID,
)
from core.models.stock_data import CanonicalRecord


class StockDataStorageSQLite(SQLiteBaseStorage):
    """stock_data 表存储管理器（SQLite版本）

    导入、查询、清空都通过这里访问数据库：
    1. 每个 connection() 块是一个事务，退出时自动提交/回滚并关闭连接
    2. exists / insert 接收外部传入的连接，由调用方决定事务边界
    3. 表上没有唯一约束，(T日, 代码) 去重由导入流程在插入前检查
    """

    def __init__(self, db_name: str = "stock_data.db", data_dir: Optional[str] = None):
        super().__init__(db_name, data_dir)

    def _init_database(self):
        """初始化数据库表结构"""
        with self.connection() as conn:
            conn.execute(STOCK_DATA_TABLE)
        logger.debug(f"Database initialized: {self.db_path}")

    def exists(self, conn: sqlite3.Connection, trade_date: str, code: str, max_id: Optional[int] = None) -> bool:
        """
        检查 (T日, 代码) 对应的记录是否已入库

        :param conn: 当前事务的连接
        :param trade_date: T日
        :param code: 代码
        :param max_id: 只在 id <= max_id 的记录中查找（None 表示不限制）
        """
        if max_id is None:
            count = conn.execute(STOCK_DATA_EXISTS, (trade_date, code)).fetchone()[0]
        else:
            count = conn.execute(f"{STOCK_DATA_EXISTS} AND id <= ?", (trade_date, code, max_id)).fetchone()[0]
        return count > 0

    def max_id(self, conn: sqlite3.Connection) -> int:
        """当前最大的 id，空表返回 0"""
        return conn.execute(STOCK_DATA_MAX_ID).fetchone()[0] or 0

    def insert(self, conn: sqlite3.Connection, record: CanonicalRecord) -> int:
        """
        插入一条规范记录

        :param conn: 当前事务的连接
        :param record: 规范记录
        :return: 新记录的 id
        """
        cursor = conn.execute(STOCK_DATA_INSERT, record.values)
        return cursor.lastrowid

    def fetch_all(self) -> List[Dict[str, Any]]:
        """按 id 升序读取全部记录"""
        with self.connection() as conn:
            rows = conn.execute(STOCK_DATA_SELECT_ALL).fetchall()
        return [dict(row) for row in rows]

    def get_total_rows(self) -> int:
        """获取数据库总行数"""
        with self.connection() as conn:
            return conn.execute(STOCK_DATA_COUNT).fetchone()[0]

    def get_table_sql(self) -> Optional[str]:
        """获取建表语句"""
        with self.connection() as conn:
            row = conn.execute(STOCK_DATA_TABLE_DDL).fetchone()
        return row[0] if row else None

    def clear(self) -> int:
        """
        清空所有数据并重置自增 id，保留表结构

        :return: 删除的行数
        """
        with self.connection() as conn:
            deleted = conn.execute(STOCK_DATA_CLEAR).rowcount
            if self._ensure_sequence_table(conn):
                conn.execute(STOCK_DATA_RESET_SEQUENCE)
        logger.info(f"Cleared {deleted} rows from stock_data, id sequence reset")
        return deleted

    def recreate(self):
        """删除并重新创建 stock_data 表"""
        with self.connection() as conn:
            conn.execute(STOCK_DATA_DROP)
            if self._ensure_sequence_table(conn):
                conn.execute(STOCK_DATA_RESET_SEQUENCE)
            conn.execute(STOCK_DATA_TABLE)
        logger.info(f"Recreated stock_data table in {self.db_path}")
