"""
数据处理核心模块

按 ETL 分层组织：
- Collectors: K线数据采集
- Transformers: 行映射、Excel 表格转换
- Loaders: 去重导入
- Extractors: HTML 表格解析
- Services: 查询与内存表格视图
- Calculators: K线周期聚合
- Models: 列定义与数据模型
- Common: 异常与数值解析
"""

# 采集器
from core.collectors import (
    BaseCollector,
    KlineCollector,
)

# 转换器
from core.transformers import (
    BaseTransformer,
    StockRowTransformer,
    SpreadsheetTransformer,
)

# 加载器
from core.loaders import (
    BaseLoader,
    StockDataLoader,
)

# 网页表格解析
from core.extractors import (
    HtmlTableExtractor,
    Table,
)

# 服务
from core.services import (
    StockQueryService,
    ColumnFilter,
    TableView,
)

# 计算器
from core.calculators import Aggregator

# 数据模型
from core.models import (
    ColumnSpec,
    StockDataSchema,
    STOCK_DATA_SCHEMA,
    CanonicalRecord,
    RejectReason,
    RowRejection,
    ImportResult,
    QueryResult,
    KlineBar,
)

# 公共组件
from core.common import (
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

__all__ = [
    # 采集器
    "BaseCollector",
    "KlineCollector",
    # 转换器
    "BaseTransformer",
    "StockRowTransformer",
    "SpreadsheetTransformer",
    # 加载器
    "BaseLoader",
    "StockDataLoader",
    # 网页表格解析
    "HtmlTableExtractor",
    "Table",
    # 服务
    "StockQueryService",
    "ColumnFilter",
    "TableView",
    # 计算器
    "Aggregator",
    # 数据模型
    "ColumnSpec",
    "StockDataSchema",
    "STOCK_DATA_SCHEMA",
    "CanonicalRecord",
    "RejectReason",
    "RowRejection",
    "ImportResult",
    "QueryResult",
    "KlineBar",
    # 异常
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
]
