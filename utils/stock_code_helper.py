import re
from typing import Any, NamedTuple, Optional

# 6 位数字 + "." + 2 位大写交易所后缀，如 688662.SH
_TS_CODE_PATTERN = re.compile(r"\d{6}\.[A-Z]{2}")
_LEADING_ORDINAL_PATTERN = re.compile(r"^\d+\s*")
_MARKET_SYMBOL_PATTERN = re.compile(r"^(sh|sz|bj)\d{6}$", re.IGNORECASE)
_DOTTED_CODE_PATTERN = re.compile(r"(\d{6})\.(SH|SZ|BJ)", re.IGNORECASE)


class NameCode(NamedTuple):
    """股票列解析结果"""
    code: str
    name: str


class StockCodeHelper:
    """
    股票代码辅助类

    处理导入数据中的 "序号 名称代码" 复合字符串，以及行情接口需要的市场前缀代码
    """

    @staticmethod
    def parse_composite_name_code(stock_value: Any) -> NameCode:
        """
        解析股票列，提取代码和名称

        输入如 "2 富信科技688662.SH"，返回 NameCode(code="688662.SH", name="富信科技")。
        代码之前的部分去掉开头的序号和空白后作为名称；匹配不到代码时整串作为名称。

        :param stock_value: 股票列原始值
        :return: NameCode
        """
        if not stock_value or not isinstance(stock_value, str):
            return NameCode(code='', name=stock_value or '')

        match = _TS_CODE_PATTERN.search(stock_value)
        if not match:
            return NameCode(code='', name=stock_value)

        name = stock_value[:match.start()].strip()
        name = _LEADING_ORDINAL_PATTERN.sub('', name).strip()
        return NameCode(code=match.group(0), name=name or stock_value)

    @staticmethod
    def to_market_symbol(stock_code: Optional[str]) -> Optional[str]:
        """
        将股票代码转换为带市场前缀的小写代码（如 sh600000），用于行情接口

        支持输入：sh600000 / 600000 / 600000.SH

        :param stock_code: 股票代码
        :return: 市场前缀代码，无法识别时返回 None
        """
        if not stock_code:
            return None

        code = re.sub(r"\s", "", str(stock_code))

        if _MARKET_SYMBOL_PATTERN.match(code):
            return code.lower()

        if len(code) == 6 and code.isdigit():
            if code.startswith(('6', '9')):
                return f"sh{code}"
            if code.startswith(('0', '3')):
                return f"sz{code}"
            if code.startswith(('8', '4')):
                return f"bj{code}"
            return f"sh{code}"

        match = _DOTTED_CODE_PATTERN.search(code)
        if match:
            return f"{match.group(2).lower()}{match.group(1)}"

        return None
