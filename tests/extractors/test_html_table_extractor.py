"""
HTML 表格提取器测试
"""
from datetime import datetime

import pytest

from core.common.exceptions import EmptyTable, NoTableFound
from core.extractors.html_table import HtmlTableExtractor, Table


@pytest.fixture
def extractor():
    return HtmlTableExtractor()


def _table(rows, header_tag="th"):
    html = ["<table>"]
    for index, row in enumerate(rows):
        tag = header_tag if index == 0 else "td"
        html.append("<tr>" + "".join(f"<{tag}>{cell}</{tag}>" for cell in row) + "</tr>")
    html.append("</table>")
    return "".join(html)


class TestSingleTable:

    def test_cells_are_trimmed_and_collapsed(self, extractor):
        html = _table([["名称", "说明"], ["  平安\n   银行 ", "a  b"]])
        tables = extractor.extract(html)

        assert len(tables) == 1
        assert tables[0].index == 1
        assert tables[0].merged is False
        assert tables[0].rows[1] == ("平安 银行", "a b")

    def test_empty_rows_are_skipped(self, extractor):
        html = _table([["A", "B"], ["", " "], ["1", "2"]])
        assert extractor.extract(html)[0].rows == (("A", "B"), ("1", "2"))

    def test_attribute_fallback(self, extractor):
        html = '<table><tr><th>A</th><th>B</th></tr><tr><td data-value="7"></td><td value="8"> </td></tr></table>'
        assert extractor.extract(html)[0].rows[1] == ("7", "8")

    def test_drop_columns(self, extractor):
        html = _table([
            ["股票", "所属概念", "现价", "股票市场类型"],
            ["平安银行", "银行", "10.5", "主板"],
        ])
        table = extractor.extract(html)[0]
        assert table.rows == (("股票", "现价"), ("平安银行", "10.5"))

    def test_custom_drop_labels(self):
        html = _table([["A", "B"], ["1", "2"]])
        table = HtmlTableExtractor(drop_labels=["B"]).extract(html)[0]
        assert table.rows == (("A",), ("1",))

    def test_stock_column_inserts_code(self, extractor):
        html = _table([
            ["T日", "股票", "现价"],
            ["9月8日", "2 富信科技688662.SH", "10.5"],
            ["2025-09-08", "平安银行", "11"],
        ])
        table = extractor.extract(html)[0]
        year = datetime.now().year

        assert table.header == ("T日", "代码", "股票", "现价")
        assert table.rows[1] == (f"{year}-09-08", "688662.SH", "富信科技", "10.5")
        assert table.rows[2] == ("2025-09-08", "", "平安银行", "11")

    def test_stock_column_reuses_code(self, extractor):
        html = _table([
            ["股票", "代码", "日期"],
            ["1 贵州茅台600519.SH", "旧代码", "9月8日"],
        ])
        table = extractor.extract(html)[0]

        assert table.header == ("股票", "代码", "日期")
        assert table.rows[1][:2] == ("贵州茅台", "600519.SH")
        assert table.rows[1][2].endswith("-09-08")

    def test_stock_before_date_column(self, extractor):
        html = _table([["股票", "T日"], ["富信科技688662.SH", "2025-01-02"]])
        table = extractor.extract(html)[0]

        assert table.header == ("股票", "T日", "代码")
        assert table.rows[1] == ("富信科技", "2025-01-02", "688662.SH")

    def test_without_stock_column_unchanged(self, extractor):
        html = _table([["T日", "现价"], ["9月8日", "1"]])
        assert extractor.extract(html)[0].rows == (("T日", "现价"), ("9月8日", "1"))

    def test_data_rows(self, extractor):
        html = _table([["T日", "股票"], ["2025-01-02", "富信科技688662.SH"]])
        table = extractor.extract(html)[0]
        assert table.data_rows() == [["2025-01-02", "688662.SH", "富信科技"]]


class TestTwoTableMerge:

    def test_merge(self, extractor):
        first = _table([
            ["现价", "涨幅 2025.09.08", "换手率"],
            ["10.5", "1.2", "3"],
            ["20", "-0.5", "4"],
        ])
        second = _table([["股票"], ["1 富信科技688662.SH"], ["2 平安银行000001.SZ"]])

        tables = extractor.extract(first + second)

        assert len(tables) == 1
        table = tables[0]
        assert table.merged is True
        assert table.index == 1
        assert len(table.rows) == 3
        assert table.header == ("日期", "代码", "股票", "现价", "涨幅 2025.09.08", "换手率")
        assert table.rows[1] == ("2025-09-08", "688662.SH", "富信科技", "10.5", "1.2", "3")
        assert table.rows[2] == ("2025-09-08", "000001.SZ", "平安银行", "20", "-0.5", "4")

    def test_merge_raw_stage(self):
        first = (("A", "涨幅 2025-9-8", "B"), ("1", "2", "3"), ("4", "5", "6"))
        second = (("名称",), ("x", "y"), ("z",))

        merged = HtmlTableExtractor.merge_tables(first, second)

        assert merged == (
            ("日期", "名称", "A", "涨幅 2025-9-8", "B"),
            ("2025-09-08", "x y", "1", "2", "3"),
            ("2025-09-08", "z", "4", "5", "6"),
        )

    def test_merge_uneven_lengths(self):
        first = (("A", "B"), ("1", "2"))
        second = (("名称",), ("x",), ("y",))

        merged = HtmlTableExtractor.merge_tables(first, second)

        assert len(merged) == 3
        # 表头倒数第二列没有日期
        assert merged[1][0] == ""
        assert merged[2] == ("", "y")

    def test_merge_then_filter(self, extractor):
        first = _table([["所属概念", "现价"], ["芯片", "1"]])
        second = _table([["股票"], ["x"]])
        table = extractor.extract(first + second)[0]
        assert table.header == ("日期", "代码", "股票", "现价")

    def test_three_tables_not_merged(self, extractor):
        html = _table([["A"], ["1"]]) * 3
        tables = extractor.extract(html)
        assert [table.index for table in tables] == [1, 2, 3]
        assert not any(table.merged for table in tables)

    def test_empty_table_does_not_count(self, extractor):
        html = _table([["A"], ["1"]]) + "<table><tr><td> </td></tr></table>"
        tables = extractor.extract(html)
        assert len(tables) == 1
        assert tables[0].merged is False


class TestErrors:

    def test_no_table(self, extractor):
        with pytest.raises(NoTableFound):
            extractor.extract("<div>没有表格</div>")

    def test_empty_tables(self, extractor):
        with pytest.raises(EmptyTable):
            extractor.extract("<table><tr><td></td></tr></table>")

    def test_all_columns_dropped(self, extractor):
        with pytest.raises(EmptyTable):
            extractor.extract(_table([["所属概念"], ["芯片"]]))

    def test_to_dict(self):
        table = Table(index=1, rows=(("A",), ("1",)), merged=True)
        assert table.to_dict() == {"index": 1, "rows": [["A"], ["1"]], "merged": True}
