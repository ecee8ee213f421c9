import re
from datetime import date, datetime, timedelta
from typing import Any, Optional, Union

# Excel 序列号纪元（已包含 1900 年闰年 bug 的修正）
EXCEL_EPOCH = date(1899, 12, 30)

_CHINESE_DATE_PATTERN = re.compile(r"(\d{1,2})月(\d{1,2})日")
_HEADER_DATE_PATTERN = re.compile(r"(\d{4})[.\-](\d{1,2})[.\-](\d{1,2})")


class DateHelper:
    """
    日期处理辅助类

    统一管理导入数据中的日期格式，最终入库格式统一为 YYYY-MM-DD：
    - Excel 表格：日期列可能是序列号（如 45000）或已格式化的字符串
    - 网页表格：日期可能是 "9月8日" 这样的中文格式，或藏在列头里（如 "涨幅 2025.09.08"）
    """

    @staticmethod
    def excel_serial_to_date(value: Any) -> str:
        """
        将 Excel 日期序列号转换为 YYYY-MM-DD

        已经是格式化日期（包含 "/" 或 "-"）的字符串原样返回；
        无法解析为数字的值按原样转为字符串。

        :param value: 单元格原始值（数字、数字字符串或日期字符串）
        :return: YYYY-MM-DD 格式的日期字符串
        """
        if value is None or value == '':
            return ''

        # NaN / NaT 不等于自身
        if value != value:
            return ''

        if isinstance(value, (date, datetime)):
            return value.strftime('%Y-%m-%d')

        if isinstance(value, str) and ('/' in value or '-' in value):
            return value

        try:
            serial = float(value)
        except (TypeError, ValueError):
            return str(value)

        try:
            # 小数部分是一天中的时间，只取日期
            converted = EXCEL_EPOCH + timedelta(days=int(serial // 1))
        except (OverflowError, ValueError):
            return str(value)

        return converted.strftime('%Y-%m-%d')

    @staticmethod
    def convert_chinese_date(text: Any, year: Optional[int] = None) -> Any:
        """
        将 "9月8日" 格式转换为 "<当年>-09-08"，其他输入原样返回

        :param text: 日期文本
        :param year: 年份，默认取当前年份
        :return: 转换后的日期字符串，或原始输入
        """
        if not text or not isinstance(text, str):
            return text

        match = _CHINESE_DATE_PATTERN.search(text)
        if not match:
            return text

        year = year or datetime.now().year
        return f"{year}-{int(match.group(1)):02d}-{int(match.group(2)):02d}"

    @staticmethod
    def extract_date_from_header(header_text: str) -> str:
        """
        从列头文本中提取日期

        优先匹配 YYYY.MM.DD / YYYY-MM-DD，其次匹配 "X月X日"（使用当前年份），
        都匹配不到时返回空字符串。

        :param header_text: 列头文本
        :return: YYYY-MM-DD 格式的日期字符串或 ""
        """
        if not header_text:
            return ''

        match = _HEADER_DATE_PATTERN.search(header_text)
        if match:
            year, month, day = (int(part) for part in match.groups())
            return f"{year}-{month:02d}-{day:02d}"

        converted = DateHelper.convert_chinese_date(header_text)
        if converted != header_text:
            return converted

        return ''

    @staticmethod
    def parse_to_date(date_obj: Union[date, datetime, str]) -> Optional[date]:
        """
        宽松地将日期对象或字符串转换为 date 对象，失败时返回 None

        字符串支持 YYYY-MM-DD、YYYY/MM/DD、YYYYMMDD。

        :param date_obj: 日期对象或字符串
        :return: date 对象或 None
        """
        if isinstance(date_obj, datetime):
            return date_obj.date()
        if isinstance(date_obj, date):
            return date_obj
        if not isinstance(date_obj, str) or not date_obj.strip():
            return None

        text = date_obj.strip()
        for fmt in ('%Y-%m-%d', '%Y/%m/%d', '%Y%m%d'):
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        return None

    @staticmethod
    def period_start(day: date, period: str) -> date:
        """
        获取日期所在周期的起始日

        :param day: 日期
        :param period: "week"（ISO 周，周一为起始）或 "month"
        :return: 周期起始日
        """
        if period == "week":
            return day - timedelta(days=day.weekday())
        if period == "month":
            return day.replace(day=1)
        raise ValueError(f"Unsupported period: {period}")
