"""
清空数据库中的股票数据（保留表结构，重置自增 id）

用法：
    # 清空所有数据（需要确认）
    python scripts/clear_data.py

    # 清空所有数据（跳过确认）
    python scripts/clear_data.py --yes
"""

import sys
import os
import argparse
from typing import Optional
from loguru import logger

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite
from utils.setup_logger import setup_logger


def clear_all_data(
    confirm: bool = True,
    db_name: str = "stock_data.db",
    data_dir: Optional[str] = None,
) -> int:
    """
    清空所有股票数据

    :param confirm: 是否需要确认
    :param db_name: 数据库文件名
    :param data_dir: 数据库目录
    :return: 删除的行数
    """
    storage = StockDataStorageSQLite(db_name=db_name, data_dir=data_dir)

    before_count = storage.get_total_rows()
    logger.info("=" * 80)
    logger.info("准备清空所有股票数据")
    logger.info("=" * 80)
    logger.info(f"当前总行数: {before_count:,}")

    if before_count == 0:
        logger.info("数据库中没有数据，无需清空")
        return 0

    if confirm:
        logger.warning("⚠️  警告: 此操作将删除所有股票数据，且无法恢复！")
        response = input("确认要清空所有数据吗？(yes/no): ").strip().lower()
        if response not in ['yes', 'y']:
            logger.info("操作已取消")
            return 0

    deleted_rows = storage.clear()
    logger.info(f"✓ 成功清空 {deleted_rows:,} 条数据")

    after_count = storage.get_total_rows()
    if after_count == 0:
        logger.info("✓ 数据库已清空，表结构保留，id 将从 1 开始")
    else:
        logger.warning(f"⚠️  警告: 清空后仍有 {after_count:,} 条数据，可能存在问题")
    return deleted_rows


def main():
    parser = argparse.ArgumentParser(description='清空数据库中的股票数据')
    parser.add_argument('--yes', action='store_true', help='跳过确认提示，直接执行清空操作')
    parser.add_argument('--db-name', type=str, default='stock_data.db', help='数据库文件名')
    parser.add_argument('--data-dir', type=str, default=None, help='数据库目录')

    args = parser.parse_args()
    setup_logger(level_console="INFO", level_file=None)

    try:
        clear_all_data(confirm=not args.yes, db_name=args.db_name, data_dir=args.data_dir)
    except Exception as e:
        logger.error(f"❌ 清空数据失败: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
