"""
公共异常定义模块

定义导入流水线、网页表格解析和行情采集中使用的所有自定义异常类
"""


class PipelineException(Exception):
    """Pipeline 基础异常类"""
    pass


class CollectorException(PipelineException):
    """采集器异常"""
    pass


class TransformerException(PipelineException):
    """转换器异常"""
    pass


class LoaderException(PipelineException):
    """加载器异常"""
    pass


class ConfigException(PipelineException):
    """配置异常"""
    pass


class ValidationException(PipelineException):
    """输入数据格式异常（对应 HTTP 400）"""
    pass


class ExtractorException(PipelineException):
    """网页表格解析异常"""
    pass


class NoTableFound(ExtractorException):
    """HTML 中没有找到表格"""
    pass


class EmptyTable(ExtractorException):
    """表格中没有有效数据"""
    pass


class DataSourceException(CollectorException):
    """数据源异常"""
    pass


class DatabaseException(LoaderException):
    """数据库异常"""
    pass
