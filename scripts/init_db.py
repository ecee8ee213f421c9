"""
初始化股票数据库，并从 Excel 导入数据

用法：
    # 重建 stock_data 表并导入默认 Excel（public/stock_data.xlsx）
    python scripts/init_db.py

    # 指定 Excel 文件
    python scripts/init_db.py --excel path/to/stock_data.xlsx

    # 保留已有数据，只追加新记录（按 T日 + 代码 去重）
    python scripts/init_db.py --keep
"""

import sys
import os
import argparse
from typing import Optional
import pandas as pd
from loguru import logger

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from project_var import DEFAULT_EXCEL_PATH
from core.loaders.stock_data import StockDataLoader
from core.models.stock_data import ImportResult
from core.transformers.spreadsheet import SpreadsheetTransformer
from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite
from utils.setup_logger import setup_logger


def read_first_sheet(excel_path: str) -> pd.DataFrame:
    """
    读取 Excel 第一个 Sheet，第一行为表头

    :param excel_path: Excel 文件路径
    :return: DataFrame
    """
    if not os.path.exists(excel_path):
        raise FileNotFoundError(f"Excel 文件不存在: {excel_path}")
    logger.info(f"读取 Excel 文件: {excel_path}")
    return pd.read_excel(excel_path, sheet_name=0, engine="openpyxl")


def init_database(
    excel_path: str = DEFAULT_EXCEL_PATH,
    keep: bool = False,
    db_name: str = "stock_data.db",
    data_dir: Optional[str] = None,
    batch_size: int = 50,
) -> ImportResult:
    """
    初始化数据库并导入 Excel 数据

    :param excel_path: Excel 文件路径
    :param keep: 为 True 时保留已有数据
    :param db_name: 数据库文件名
    :param data_dir: 数据库目录，默认使用 DATA_PATH / 项目 data 目录
    :param batch_size: 每个事务导入的行数
    :return: 导入结果
    """
    storage = StockDataStorageSQLite(db_name=db_name, data_dir=data_dir)
    if not keep:
        storage.recreate()
    logger.info(f"数据库位置: {storage.db_path}")

    df = read_first_sheet(excel_path)
    rows = SpreadsheetTransformer().transform(df)
    if not rows:
        logger.warning("Excel 中没有数据，跳过导入")
        return ImportResult()

    loader = StockDataLoader(storage, config={"batch_size": batch_size})
    result = loader.load(rows)

    logger.info("=" * 80)
    logger.info(f"导入完成: 插入 {result.inserted:,} 条, 跳过 {result.skipped:,} 条, 共 {result.total:,} 条")
    logger.info(f"数据库总行数: {storage.get_total_rows():,}")
    logger.info("=" * 80)
    return result


def main():
    parser = argparse.ArgumentParser(
        description='初始化股票数据库并从 Excel 导入数据',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  python scripts/init_db.py
  python scripts/init_db.py --excel data/stock_data.xlsx --keep
        """
    )
    parser.add_argument('--excel', type=str, default=DEFAULT_EXCEL_PATH, help='Excel 文件路径')
    parser.add_argument('--keep', action='store_true', help='保留已有数据，不重建表')
    parser.add_argument('--db-name', type=str, default='stock_data.db', help='数据库文件名')
    parser.add_argument('--data-dir', type=str, default=None, help='数据库目录')
    parser.add_argument('--batch-size', type=int, default=50, help='每个事务导入的行数')

    args = parser.parse_args()
    setup_logger(level_console="INFO", file_pattern="init_db_{time:YYYY-MM-DD}.log")

    try:
        init_database(
            excel_path=args.excel,
            keep=args.keep,
            db_name=args.db_name,
            data_dir=args.data_dir,
            batch_size=args.batch_size,
        )
    except Exception as e:
        logger.error(f"初始化数据库失败: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
