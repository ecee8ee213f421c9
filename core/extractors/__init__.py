"""
网页表格解析模块
"""

from core.extractors.html_table import HtmlTableExtractor, Table

__all__ = [
    "HtmlTableExtractor",
    "Table",
]
