"""
查看数据库中的股票数据

用法：
    # 表结构、总行数、前 10 条数据和全部列名
    python scripts/view_data.py

    # 筛选 + 排序
    python scripts/view_data.py --filter "T换手率>=5" --filter "股票~科技" --sort T日 --desc --limit 20
"""

import sys
import os
import argparse
from typing import List, Optional, Sequence
from loguru import logger

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.services.query import StockQueryService
from core.services.table_view import ColumnFilter, TableView
from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite
from utils.setup_logger import setup_logger


def format_row(row: dict, headers: Sequence[str]) -> str:
    return " | ".join(f"{header}={row.get(header, '')}" for header in headers)


def view_data(
    limit: int = 10,
    filters: Optional[List[str]] = None,
    sort_key: Optional[str] = None,
    descending: bool = False,
    db_name: str = "stock_data.db",
    data_dir: Optional[str] = None,
) -> List[dict]:
    """
    输出表结构、总行数、前 limit 条数据和列名

    :param limit: 输出的行数
    :param filters: 筛选表达式列表，如 ["T换手率>=5"]
    :param sort_key: 排序列
    :param descending: 是否降序
    :param db_name: 数据库文件名
    :param data_dir: 数据库目录
    :return: 输出的行
    """
    storage = StockDataStorageSQLite(db_name=db_name, data_dir=data_dir)

    logger.info("=" * 80)
    logger.info("表结构:")
    logger.info(storage.get_table_sql())
    logger.info(f"总行数: {storage.get_total_rows():,}")

    result = StockQueryService(storage).query_all()
    view = TableView(result.headers, result.rows)
    column_filters = [ColumnFilter.parse(expression) for expression in (filters or [])]
    rows = view.apply(column_filters, sort_key=sort_key, descending=descending)
    if column_filters:
        logger.info(f"筛选后行数: {len(rows):,}")

    headers = view.ordered_headers()
    shown = rows[:limit]
    logger.info(f"前 {len(shown)} 条数据:")
    for index, row in enumerate(shown, start=1):
        logger.info(f"[{index}] {format_row(row, headers)}")

    logger.info(f"所有列名 ({len(headers)}): {', '.join(headers)}")
    logger.info("=" * 80)
    return shown


def main():
    parser = argparse.ArgumentParser(description='查看数据库中的股票数据')
    parser.add_argument('--limit', type=int, default=10, help='输出的行数')
    parser.add_argument('--filter', action='append', default=[], dest='filters',
                        help='筛选表达式，可重复，如 "T换手率>=5"、"股票~科技"、"T涨幅=1..3"')
    parser.add_argument('--sort', type=str, default=None, help='排序列')
    parser.add_argument('--desc', action='store_true', help='降序排列')
    parser.add_argument('--db-name', type=str, default='stock_data.db', help='数据库文件名')
    parser.add_argument('--data-dir', type=str, default=None, help='数据库目录')

    args = parser.parse_args()
    setup_logger(level_console="INFO", level_file=None)

    try:
        view_data(
            limit=args.limit,
            filters=args.filters,
            sort_key=args.sort,
            descending=args.desc,
            db_name=args.db_name,
            data_dir=args.data_dir,
        )
    except Exception as e:
        logger.error(f"查看数据失败: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
