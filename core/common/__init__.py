"""
公共组件模块

提供异常定义、数值解析等公共组件
"""

from core.common.exceptions import (
    PipelineException,
    CollectorException,
    TransformerException,
    LoaderException,
    ConfigException,
    ValidationException,
    ExtractorException,
    NoTableFound,
    EmptyTable,
    DataSourceException,
    DatabaseException,
)

from core.common.utils import (
    parse_magnitude_number,
    compute_ratio,
    round_half_up,
    chunked,
)

__all__ = [
    "PipelineException",
    "CollectorException",
    "TransformerException",
    "LoaderException",
    "ConfigException",
    "ValidationException",
    "ExtractorException",
    "NoTableFound",
    "EmptyTable",
    "DataSourceException",
    "DatabaseException",
    "parse_magnitude_number",
    "compute_ratio",
    "round_half_up",
    "chunked",
]
