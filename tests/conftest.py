"""
公共测试夹具
"""
import sys
import os
import pytest

# 添加项目根目录到路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite


def make_row(trade_date="2024-01-02", code="688662.SH", name="富信科技", **overrides):
    """
    构造一行 35 个位置值的原始数据

    overrides 的键为 "c<位置>"，如 c20="50万"
    """
    row = [trade_date, code, name] + [float(i) for i in range(3, 35)]
    row[19] = "30万"
    row[20] = "50万"
    row[21] = "100万"
    row[22] = "2.5%"
    for key, value in overrides.items():
        row[int(key[1:])] = value
    return row


@pytest.fixture
def storage(tmp_path):
    """临时目录中的 stock_data 数据库"""
    return StockDataStorageSQLite(db_name="test_stock_data.db", data_dir=str(tmp_path))


@pytest.fixture
def row_factory():
    return make_row
