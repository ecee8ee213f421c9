"""
内存表格视图测试
"""
import pytest

from core.common.exceptions import ValidationException
from core.services.table_view import ColumnFilter, TableView

HEADERS = ["T日", "代码", "股票", "T涨幅", "T换手率", "T加1最大涨幅", "备注"]


@pytest.fixture
def view():
    rows = [
        {"T日": "2024-01-03", "代码": "600000.SH", "股票": "浦发银行", "T涨幅": 1.5, "T换手率": 3, "T加1最大涨幅": "", "备注": "Bank"},
        {"T日": "2024-01-10", "代码": "000001.SZ", "股票": "平安银行", "T涨幅": -2, "T换手率": 8, "T加1最大涨幅": 4, "备注": "bank"},
        {"T日": "2023-12-29", "代码": "688662.SH", "股票": "富信科技", "T涨幅": 10, "T换手率": "", "T加1最大涨幅": 1, "备注": "tech"},
    ]
    return TableView(HEADERS, rows)


class TestColumnFilter:

    @pytest.mark.parametrize("expression,expected", [
        ("T换手率>=5", ColumnFilter("T换手率", "ge", value="5")),
        ("T换手率<=5", ColumnFilter("T换手率", "le", value="5")),
        ("T涨幅>0", ColumnFilter("T涨幅", "gt", value="0")),
        ("T涨幅<-1", ColumnFilter("T涨幅", "lt", value="-1")),
        ("T涨幅=10", ColumnFilter("T涨幅", "eq", value="10")),
        ("T涨幅!=10", ColumnFilter("T涨幅", "ne", value="10")),
        ("股票~科技", ColumnFilter("股票", "contains", value="科技")),
        ("股票!~银行", ColumnFilter("股票", "not_contains", value="银行")),
        ("T涨幅=1..3", ColumnFilter("T涨幅", "range", min="1", max="3")),
        ("T涨幅=1.5..", ColumnFilter("T涨幅", "range", min="1.5", max="")),
        ("T涨幅=..-1", ColumnFilter("T涨幅", "range", min="", max="-1")),
    ])
    def test_parse(self, expression, expected):
        assert ColumnFilter.parse(expression) == expected

    @pytest.mark.parametrize("expression", ["", "T涨幅", "~科技"])
    def test_parse_invalid(self, expression):
        with pytest.raises(ValidationException):
            ColumnFilter.parse(expression)

    def test_unknown_operator(self):
        with pytest.raises(ValidationException):
            ColumnFilter("T涨幅", "between")

    def test_non_numeric_operand(self):
        with pytest.raises(ValidationException):
            ColumnFilter("T涨幅", "gt", value="abc").matches({"T涨幅": 1})


class TestTableView:

    def test_ordered_headers(self, view):
        assert view.ordered_headers() == ["T日", "代码", "股票", "T加1最大涨幅", "T换手率", "T涨幅", "备注"]

    def test_column_type(self, view):
        assert view.column_type("T涨幅") == "number"
        assert view.column_type("股票") == "text"
        assert view.column_type("不存在") == "text"

    def test_number_filter(self, view):
        rows = view.filter([ColumnFilter("T换手率", "ge", value="5")])
        assert [row["代码"] for row in rows] == ["000001.SZ"]

    def test_non_numeric_cells_fail_number_filter(self, view):
        rows = view.filter([ColumnFilter("T换手率", "lt", value="100")])
        assert len(rows) == 2

    def test_empty_filter_matches_everything(self, view):
        assert len(view.filter([ColumnFilter("T换手率", "gt")])) == 3
        assert len(view.filter([ColumnFilter("T换手率", "range")])) == 3
        assert len(view.filter([ColumnFilter("股票", "contains")])) == 3

    def test_range_filter(self, view):
        rows = view.filter([ColumnFilter("T涨幅", "range", min="0", max="5")])
        assert [row["代码"] for row in rows] == ["600000.SH"]

    def test_text_filters_case_insensitive(self, view):
        assert len(view.filter([ColumnFilter("备注", "contains", value="BANK")])) == 2
        assert len(view.filter([ColumnFilter("备注", "not_contains", value="bank")])) == 1

    def test_filters_combine(self, view):
        rows = view.filter([
            ColumnFilter("备注", "contains", value="bank"),
            ColumnFilter("T涨幅", "gt", value="0"),
        ])
        assert [row["代码"] for row in rows] == ["600000.SH"]

    def test_unknown_column(self, view):
        with pytest.raises(ValidationException):
            view.filter([ColumnFilter("不存在", "gt", value="1")])
        with pytest.raises(ValidationException):
            view.sort(view.rows, "不存在")

    def test_sort_by_date(self, view):
        rows = view.sort(view.rows, "T日")
        assert [row["T日"] for row in rows] == ["2023-12-29", "2024-01-03", "2024-01-10"]
        rows = view.sort(view.rows, "T日", descending=True)
        assert rows[0]["T日"] == "2024-01-10"

    def test_sort_numeric(self, view):
        rows = view.sort(view.rows, "T涨幅")
        assert [row["T涨幅"] for row in rows] == [-2, 1.5, 10]

    def test_sort_text(self, view):
        rows = view.sort(view.rows, "代码")
        assert [row["代码"] for row in rows] == ["000001.SZ", "600000.SH", "688662.SH"]

    def test_apply_does_not_modify_rows(self, view):
        original = list(view.rows)
        view.apply([ColumnFilter("T涨幅", "gt", value="0")], sort_key="T涨幅", descending=True)
        assert view.rows == original
