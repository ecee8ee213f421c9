"""
工具函数：日志、日期、股票代码
"""
