"""
行映射器测试
"""
import pytest

from core.models.stock_data import CanonicalRecord, RejectReason, RowRejection
from core.transformers.stock_row import StockRowTransformer, coerce_cell, is_empty, to_key_text


@pytest.fixture
def transformer():
    """创建 StockRowTransformer 实例"""
    return StockRowTransformer()


class TestHelpers:

    @pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
    def test_is_empty(self, value):
        assert is_empty(value)

    @pytest.mark.parametrize("value", [0, 0.0, "0", "abc"])
    def test_not_empty(self, value):
        assert not is_empty(value)

    def test_to_key_text(self):
        assert to_key_text(20240102.0) == "20240102"
        assert to_key_text(" 688662.SH ") == "688662.SH"
        assert to_key_text(1.5) == "1.5"

    def test_coerce_cell(self):
        assert coerce_cell("12.5") == 12.5
        assert coerce_cell(" -3 ") == -3.0
        assert coerce_cell("1e3") == 1000.0
        assert coerce_cell(7) == 7.0
        assert coerce_cell("509.87万") == "509.87万"
        assert coerce_cell("2.5%") == "2.5%"
        assert coerce_cell("inf") == "inf"
        assert coerce_cell(" abc ") == "abc"
        assert coerce_cell("") is None
        assert coerce_cell(None) is None


class TestStockRowTransformer:
    """行映射器测试类"""

    def test_map_full_row(self, transformer, row_factory):
        record = transformer.map_row(row_factory())

        assert isinstance(record, CanonicalRecord)
        assert len(record.values) == 36
        assert record.key == ("2024-01-02", "688662.SH")
        assert record.values[2] == "富信科技"
        assert record.values[3] == 3.0
        # 带单位的成交量按原字符串保存
        assert record.values[20] == "50万"
        assert record.values[21] == "100万"
        assert record.values[22] == "2.5%"
        # 比值由原始值计算
        assert record.volume_ratio == 2.0

    def test_short_row_is_padded(self, transformer):
        record = transformer.map_row(["2024-01-02", "000001.SZ", "平安银行"])

        assert isinstance(record, CanonicalRecord)
        assert len(record.values) == 36
        assert record.values[3:] == (None,) * 33

    def test_keys_are_strings(self, transformer, row_factory):
        record = transformer.map_row(row_factory(trade_date=20240102, code=1.0))
        assert record.trade_date == "20240102"
        assert record.code == "1"

    @pytest.mark.parametrize("trade_date,code", [
        ("", "000001.SZ"),
        (None, "000001.SZ"),
        ("2024-01-02", ""),
        ("2024-01-02", None),
        ("  ", "000001.SZ"),
    ])
    def test_missing_key(self, transformer, row_factory, trade_date, code):
        result = transformer.map_row(row_factory(trade_date=trade_date, code=code), row_index=3)

        assert isinstance(result, RowRejection)
        assert result.reason == RejectReason.MISSING_KEY
        assert result.row_index == 3

    def test_missing_key_on_tiny_row(self, transformer):
        result = transformer.map_row(["2024-01-02"])
        assert result.reason == RejectReason.MISSING_KEY

    def test_too_long_row(self, transformer, row_factory):
        result = transformer.map_row(row_factory() + ["extra"])

        assert isinstance(result, RowRejection)
        assert result.reason == RejectReason.SCHEMA_MISMATCH

    @pytest.mark.parametrize("value", ["2024-01-02,000001.SZ", 42, None])
    def test_not_a_row(self, transformer, value):
        result = transformer.map_row(value)
        assert result.reason == RejectReason.SCHEMA_MISMATCH

    def test_ratio_null_cases(self, transformer, row_factory):
        assert transformer.map_row(row_factory(c20="0万")).volume_ratio is None
        assert transformer.map_row(row_factory(c20=None)).volume_ratio is None
        assert transformer.map_row(row_factory(c21="abc")).volume_ratio is None

    def test_ratio_on_short_row(self, transformer):
        record = transformer.map_row(["2024-01-02", "000001.SZ"])
        assert record.volume_ratio is None

    def test_mapping_row(self, transformer):
        record = transformer.map_row({
            "T日": "2024-01-02",
            "代码": "000001.SZ",
            "股票": "平安银行",
            "T_1收盘价": "10.5",
            "T_1成交量_股": "50万",
            "T成交量_股": "150万",
            "T成交量_T_1成交量": 999,
            "未知列": "x",
        })

        assert isinstance(record, CanonicalRecord)
        as_dict = record.as_dict()
        assert as_dict["T减1收盘价"] == 10.5
        assert as_dict["T减1成交量_股"] == "50万"
        # 计算字段总是重新计算
        assert as_dict["T成交量除T减1成交量"] == 3.0
        assert list(as_dict) == record.schema.names

    def test_idempotent(self, transformer, row_factory):
        row = row_factory()
        assert transformer.map_row(row) == transformer.map_row(row)
        # 输入行不被修改
        assert row == row_factory()

    def test_transform_batch(self, transformer, row_factory):
        rows = [row_factory(), row_factory(code=""), row_factory(code="000001.SZ")]
        records, rejections = transformer.transform(rows)

        assert len(records) == 2
        assert len(rejections) == 1
        assert rejections[0].row_index == 1
