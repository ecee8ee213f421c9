"""
股票数据导入器

把一批原始行映射为规范记录，按 (T日, 代码) 去重后写入 stock_data 表
"""

import sqlite3
from typing import Any, Dict, List, Optional, Sequence

from loguru import logger

from core.common.exceptions import DatabaseException, ValidationException
from core.common.utils import chunked
from core.loaders.base import BaseLoader
from core.models.stock_data import ImportResult, RowRejection
from core.transformers.stock_row import StockRowTransformer


class StockDataLoader(BaseLoader):
    """
    股票数据导入器

    导入规则：
    1. 每 batch_size 行一个事务，块内全部处理完后提交
    2. 映射失败的行计为跳过，不中断导入
    3. 去重只比较本批次开始前已入库的记录，同一批次内的重复行都会插入
    4. 单行插入失败计为跳过并记录日志
    5. inserted + skipped == total == 输入行数
    """

    def __init__(
        self,
        storage: Any,
        transformer: Optional[StockRowTransformer] = None,
        config: Optional[Dict[str, Any]] = None,
    ):
        """
        Args:
            storage: StockDataStorageSQLite 实例
            transformer: 行映射器，默认新建 StockRowTransformer
            config: 加载器配置，支持 batch_size
        """
        super().__init__(storage, config)
        self.transformer = transformer or StockRowTransformer()

    def load(self, data: Sequence[Any]) -> ImportResult:
        """
        导入一批原始行

        Args:
            data: 原始行列表，每行为位置列表或以表头为键的字典

        Returns:
            ImportResult: 插入数、跳过数和总数

        Raises:
            ValidationException: 输入不是非空列表
            DatabaseException: 打开连接或提交事务失败
        """
        if not isinstance(data, (list, tuple)) or len(data) == 0:
            raise ValidationException("数据格式错误: 需要非空的行数组")

        result = ImportResult(total=len(data))
        rows: List[tuple] = list(enumerate(data))
        logger.info(f"开始导入 {result.total} 行数据，批量大小: {self.batch_size}")

        try:
            baseline_id: Optional[int] = None
            for chunk in chunked(rows, self.batch_size):
                with self.storage.connection() as conn:
                    if baseline_id is None:
                        baseline_id = self.storage.max_id(conn)
                    for row_index, raw_row in chunk:
                        if self._load_row(conn, raw_row, row_index, baseline_id):
                            result.inserted += 1
                        else:
                            result.skipped += 1
        except sqlite3.Error as e:
            logger.error(f"导入失败: {e}")
            raise DatabaseException(f"数据库写入失败: {e}") from e

        logger.info(
            f"导入完成: 插入 {result.inserted} 条, 跳过 {result.skipped} 条, 共 {result.total} 条"
        )
        return result

    def _load_row(self, conn: sqlite3.Connection, raw_row: Any, row_index: int, baseline_id: int) -> bool:
        """处理单行，返回是否插入"""
        record = self.transformer.map_row(raw_row, row_index)
        if isinstance(record, RowRejection):
            logger.warning(f"跳过行 {row_index}: {record.reason.value} {record.detail}")
            return False

        trade_date, code = record.key
        if self.storage.exists(conn, trade_date, code, max_id=baseline_id):
            logger.debug(f"跳过已存在记录: {trade_date} {code}")
            return False

        try:
            self.storage.insert(conn, record)
        except sqlite3.Error as e:
            logger.error(f"插入失败 行 {row_index} ({trade_date} {code}): {e}")
            return False
        return True
