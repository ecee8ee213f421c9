"""
工具函数模块

提供导入流水线中使用的数值解析工具函数
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Iterator, List, Optional, Sequence, TypeVar

T = TypeVar("T")

# 中文数量单位
MAGNITUDE_UNITS = {
    "万": 10_000,
    "亿": 100_000_000,
}

_MAGNITUDE_PATTERN = re.compile(r"^([\d.]+)([万亿])?$")
_FLOAT_PREFIX_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


def parse_float_prefix(text: str) -> Optional[float]:
    """
    解析字符串开头的浮点数（忽略后面的非数字内容）

    Args:
        text: 输入字符串，如 "12.5%"

    Returns:
        解析出的浮点数，没有数字前缀时返回 None
    """
    match = _FLOAT_PREFIX_PATTERN.match(text.strip())
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_magnitude_number(value: Any) -> Optional[float]:
    """
    将带中文单位的数字转换为数值

    例如 "509.87万" -> 5098700，"2.46亿" -> 246000000，"1,234.5" -> 1234.5。
    空值或无法解析的内容返回 None。

    Args:
        value: 原始单元格值

    Returns:
        数值或 None
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if not value or not isinstance(value, str):
        return None

    cleaned = value.strip().replace(",", "")
    if not cleaned:
        return None

    match = _MAGNITUDE_PATTERN.match(cleaned)
    if not match:
        # 不是中文单位格式，尝试直接按数字解析
        return parse_float_prefix(cleaned)

    try:
        number = float(match.group(1))
    except ValueError:
        return None

    unit = match.group(2)
    if unit:
        number *= MAGNITUDE_UNITS[unit]
    return number if math.isfinite(number) else None


def round_half_up(number: float, digits: int = 2) -> float:
    """
    按浮点数的精确二进制值做定点舍入（远离零方向），与 toFixed 的结果一致

    例如 0.125 -> 0.13，而 1.005 的精确值略小于 1.005，结果为 1.0。

    Args:
        number: 待舍入的有限浮点数
        digits: 保留小数位数

    Returns:
        舍入后的浮点数
    """
    exact = Decimal(number)
    quantum = Decimal(1).scaleb(-digits)
    # 整数部分位数 + 小数位数，超过默认 28 位精度时 quantize 会抛 InvalidOperation
    with localcontext() as context:
        context.prec = max(context.prec, exact.adjusted() + digits + 2)
        return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))


def compute_ratio(numerator: Any, denominator: Any) -> Optional[float]:
    """
    计算两个（可能带中文单位的）数值的比值，保留两位小数

    任一操作数无法解析、分母为 0 或商溢出为无穷大时返回 None。

    Args:
        numerator: 被除数原始值
        denominator: 除数原始值

    Returns:
        比值或 None
    """
    dividend = parse_magnitude_number(numerator)
    divisor = parse_magnitude_number(denominator)

    if dividend is None or divisor is None or divisor == 0:
        return None

    ratio = dividend / divisor
    if not math.isfinite(ratio):
        return None
    return round_half_up(ratio, 2)


def chunked(items: Sequence[T], chunk_size: int) -> Iterator[List[T]]:
    """
    将序列按固定大小分块

    Args:
        items: 待分块的序列
        chunk_size: 每块的大小

    Yields:
        每一块的列表
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    for start in range(0, len(items), chunk_size):
        yield list(items[start:start + chunk_size])
