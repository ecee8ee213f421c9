"""
K线数据模型

定义图表使用的K线柱结构
"""

from dataclasses import dataclass
from typing import List

import pandas as pd

KLINE_COLUMNS = ['timestamp', 'open', 'high', 'low', 'close', 'volume']


@dataclass
class KlineBar:
    """
    K线柱

    timestamp 为毫秒时间戳；周K/月K的 timestamp 是周期起始日（周一 / 月初）
    """
    timestamp: int  # 毫秒时间戳
    open: float  # 开盘价
    high: float  # 最高价
    low: float  # 最低价
    close: float  # 收盘价
    volume: float  # 成交量

    def to_dict(self) -> dict:
        return {
            'timestamp': self.timestamp,
            'open': self.open,
            'high': self.high,
            'low': self.low,
            'close': self.close,
            'volume': self.volume,
        }

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> List['KlineBar']:
        """
        从 DataFrame 批量创建实例列表

        Args:
            df: 包含 date（datetime）、open、high、low、close、volume 列的 DataFrame

        Returns:
            List[KlineBar]: 按时间升序排列的实例列表
        """
        if df is None or df.empty:
            return []

        df = df.sort_values('date')
        bars = []
        for record in df.to_dict('records'):
            bars.append(cls(
                timestamp=int(pd.Timestamp(record['date']).timestamp() * 1000),
                open=float(record['open']),
                high=float(record['high']),
                low=float(record['low']),
                close=float(record['close']),
                volume=float(record['volume']) if pd.notna(record['volume']) else 0.0,
            ))
        return bars
