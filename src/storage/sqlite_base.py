"""
SQLite存储基类
提供统一的数据库连接和基础功能
"""
import os
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Optional
from loguru import logger
from project_var import DATA_DIR
import dotenv

dotenv.load_dotenv()


class SQLiteBaseStorage:
    """SQLite存储基类"""

    def __init__(self, db_name: str, data_dir: Optional[str] = None):
        data_path = data_dir or os.getenv("DATA_PATH", DATA_DIR)
        self.data_dir = data_path if os.path.isabs(data_path) else os.path.join(os.getcwd(), data_path)
        self.db_path = os.path.join(self.data_dir, db_name)

        # 确保目录存在
        os.makedirs(self.data_dir, exist_ok=True)

        # 初始化数据库
        self._init_database()

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """
        获取数据库连接（上下文管理器）

        正常退出时提交，异常时回滚，任何情况下都会关闭连接。
        一个 with 块就是一个事务。
        """
        conn = sqlite3.connect(self.db_path, timeout=30.0)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")  # 启用WAL模式，读写互不阻塞
        conn.execute("PRAGMA synchronous=NORMAL")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self):
        """初始化数据库表结构（子类实现）"""
        raise NotImplementedError("Subclass must implement _init_database")

    def _ensure_sequence_table(self, conn: sqlite3.Connection):
        """AUTOINCREMENT 表创建后 sqlite_sequence 才存在，重置 id 前先检查"""
        row = conn.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = 'sqlite_sequence'"
        ).fetchone()
        if row is None:
            logger.debug("sqlite_sequence does not exist yet, nothing to reset")
        return row is not None
