"""
聚合计算器

用于将日K线数据聚合为周K线 / 月K线数据
"""

import pandas as pd
from typing import Optional, Dict, Any
from loguru import logger

from utils.date_helper import DateHelper

PERIODS = ('week', 'month')


class Aggregator:
    """
    聚合计算器

    聚合规则：
    - 开盘价：周期内第一根K线的开盘价
    - 收盘价：周期内最后一根K线的收盘价
    - 最高价：周期内最高价的最大值
    - 最低价：周期内最低价的最小值
    - 成交量：周期内成交量之和
    - 时间：周期起始日（周一 / 月初）
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        初始化聚合计算器

        Args:
            config: 配置字典，预留
        """
        self.config = config or {}
        logger.debug("初始化聚合计算器")

    def aggregate_to_period(self, daily_df: pd.DataFrame, period: str) -> pd.DataFrame:
        """
        将日K线数据聚合为周K线或月K线

        Args:
            daily_df: 日K线数据DataFrame，包含以下列：
                - date: 交易日期（datetime64）
                - open / high / low / close: 价格
                - volume: 成交量
            period: week 或 month

        Returns:
            pd.DataFrame: 聚合后的K线数据，列与输入相同，date 为周期起始日，按时间升序
        """
        if period not in PERIODS:
            raise ValueError(f"不支持的聚合周期: {period}")

        columns = ['date', 'open', 'high', 'low', 'close', 'volume']
        if daily_df is None or daily_df.empty:
            logger.warning("日K线数据为空，无法聚合")
            return pd.DataFrame(columns=columns)

        missing_columns = [col for col in columns if col not in daily_df.columns]
        if missing_columns:
            raise ValueError(f"日K线数据缺少必需的列: {missing_columns}")

        logger.info(f"开始聚合日K线为{period}K线，输入数据量: {len(daily_df)}")

        # 确保按时间排序
        df = daily_df.sort_values('date').reset_index(drop=True)
        period_start = df['date'].apply(
            lambda value: pd.Timestamp(DateHelper.period_start(pd.Timestamp(value).date(), period))
        )

        result_df = df.groupby(period_start, sort=True).agg(
            open=('open', 'first'),
            high=('high', 'max'),
            low=('low', 'min'),
            close=('close', 'last'),
            volume=('volume', 'sum'),
        )
        result_df.index.name = 'date'
        result_df = result_df.reset_index()[columns]

        logger.info(f"聚合完成，共生成 {len(result_df)} 条{period}K线数据")
        return result_df
