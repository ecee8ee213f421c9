"""
命令行脚本测试：初始化导入、清空、查看
"""
from unittest.mock import patch

import pandas as pd
import pytest

from scripts.clear_data import clear_all_data
from scripts.init_db import init_database, read_first_sheet
from scripts.view_data import format_row, view_data
from src.storage.stock_data_storage_sqlite import StockDataStorageSQLite

DB_NAME = "cli_stock_data.db"


@pytest.fixture
def excel_path(tmp_path):
    """第一个 Sheet 使用旧表头，T日 为 Excel 序列号"""
    df = pd.DataFrame({
        "T日": [45000, 45001, None],
        "股票": ["2 富信科技688662.SH", "平安银行000001.SZ", None],
        "T_1收盘价": [10.5, 11.0, None],
        "T换手率": [3.2, 8.1, None],
        "T_1的最大涨幅": [1.0, 4.0, None],
    })
    path = tmp_path / "stock_data.xlsx"
    df.to_excel(path, index=False, engine="openpyxl")
    return str(path)


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path / "db")


def _storage(data_dir):
    return StockDataStorageSQLite(db_name=DB_NAME, data_dir=data_dir)


class TestInitDatabase:

    def test_import_from_excel(self, excel_path, data_dir):
        result = init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)

        assert (result.inserted, result.skipped, result.total) == (2, 0, 2)
        rows = _storage(data_dir).fetch_all()
        assert rows[0]["T日"] == "2023-03-15"
        assert rows[0]["代码"] == "688662.SH"
        assert rows[0]["股票"] == "富信科技"
        assert rows[0]["T减1收盘价"] == 10.5
        assert rows[1]["T加1最大涨幅"] == 4.0

    def test_rerun_recreates_table(self, excel_path, data_dir):
        init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)
        result = init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)

        assert result.inserted == 2
        assert _storage(data_dir).get_total_rows() == 2

    def test_keep_skips_existing(self, excel_path, data_dir):
        init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)
        result = init_database(excel_path, keep=True, db_name=DB_NAME, data_dir=data_dir)

        assert (result.inserted, result.skipped) == (0, 2)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_first_sheet(str(tmp_path / "missing.xlsx"))


class TestClearData:

    def test_clear_without_confirm(self, excel_path, data_dir):
        init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)

        deleted = clear_all_data(confirm=False, db_name=DB_NAME, data_dir=data_dir)

        assert deleted == 2
        assert _storage(data_dir).get_total_rows() == 0

    def test_cancelled(self, excel_path, data_dir):
        init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)

        with patch("builtins.input", return_value="no"):
            assert clear_all_data(confirm=True, db_name=DB_NAME, data_dir=data_dir) == 0
        assert _storage(data_dir).get_total_rows() == 2

    def test_empty_database(self, data_dir):
        assert clear_all_data(confirm=False, db_name=DB_NAME, data_dir=data_dir) == 0


class TestViewData:

    def test_filter_and_sort(self, excel_path, data_dir):
        init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)

        rows = view_data(filters=["T换手率>=1"], sort_key="T换手率", descending=True,
                         db_name=DB_NAME, data_dir=data_dir)

        assert [row["代码"] for row in rows] == ["000001.SZ", "688662.SH"]

    def test_limit(self, excel_path, data_dir):
        init_database(excel_path, db_name=DB_NAME, data_dir=data_dir)
        assert len(view_data(limit=1, db_name=DB_NAME, data_dir=data_dir)) == 1

    def test_format_row(self):
        assert format_row({"A": 1, "B": ""}, ["A", "B", "C"]) == "A=1 | B= | C="
