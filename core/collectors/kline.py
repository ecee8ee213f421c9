"""
K线数据采集器

从 akshare 新浪接口获取分钟K线和日K线，周K/月K由日K线聚合得到
"""

from typing import Any, Dict, Optional
import pandas as pd
from loguru import logger

from core.calculators.aggregator import Aggregator
from core.collectors.base import BaseCollector
from core.common.exceptions import DataSourceException, ValidationException
from utils.stock_code_helper import StockCodeHelper

KLINE_TYPES = ('minute', 'day', 'week', 'month')
PRICE_COLUMNS = ['open', 'high', 'low', 'close', 'volume']


class KlineCollector(BaseCollector):
    """
    K线数据采集器

    - minute: stock_zh_a_minute，5 分钟K线
    - day: stock_zh_a_daily，前复权日K线
    - week / month: 日K线按周一 / 月初聚合
    """

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        provider: Any = None,
        aggregator: Optional[Aggregator] = None,
    ):
        super().__init__(config, provider)
        self.minute_period = str(self.config.get("minute_period", "5"))
        self.adjust = self.config.get("adjust", "qfq")
        self.aggregator = aggregator or Aggregator()

    def collect(self, code: str, kline_type: str = "day") -> pd.DataFrame:
        """
        采集K线数据

        Args:
            code: 股票代码，支持 sh600000 / 600000 / 600000.SH
            kline_type: minute / day / week / month

        Returns:
            pd.DataFrame: 列为 date(datetime64)、open、high、low、close、volume，按时间升序

        Raises:
            ValidationException: 代码或K线类型无效
            DataSourceException: 数据源调用失败或返回数据格式异常
        """
        if kline_type not in KLINE_TYPES:
            raise ValidationException(f"不支持的K线类型: {kline_type}，可选: {', '.join(KLINE_TYPES)}")

        symbol = StockCodeHelper.to_market_symbol(code)
        if symbol is None:
            raise ValidationException(f"无法识别的股票代码: {code}")

        logger.info(f"开始采集K线数据: {symbol}, 类型: {kline_type}")

        if kline_type == "minute":
            raw = self._call_source("stock_zh_a_minute", symbol=symbol, period=self.minute_period, adjust="")
            df = self._normalize(raw, date_column="day")
        else:
            raw = self._call_source("stock_zh_a_daily", symbol=symbol, adjust=self.adjust)
            df = self._normalize(raw, date_column="date")
            if kline_type in ("week", "month"):
                df = self.aggregator.aggregate_to_period(df, kline_type)

        logger.info(f"K线数据采集完成: {symbol}, 类型: {kline_type}, 共 {len(df)} 条")
        return df

    @staticmethod
    def _normalize(raw: Optional[pd.DataFrame], date_column: str) -> pd.DataFrame:
        """统一列名和类型，丢弃价格不完整的行"""
        if raw is None or raw.empty:
            return pd.DataFrame(columns=['date'] + PRICE_COLUMNS)

        df = raw.reset_index() if date_column not in raw.columns else raw.copy()
        if date_column not in df.columns:
            raise DataSourceException(f"数据源返回缺少时间列: {date_column}")
        missing = [column for column in PRICE_COLUMNS if column not in df.columns]
        if missing:
            raise DataSourceException(f"数据源返回缺少列: {missing}")

        df = df.rename(columns={date_column: 'date'})[['date'] + PRICE_COLUMNS].copy()
        df['date'] = pd.to_datetime(df['date'], errors='coerce')
        for column in PRICE_COLUMNS:
            df[column] = pd.to_numeric(df[column], errors='coerce')

        before = len(df)
        df = df.dropna(subset=['date', 'open', 'high', 'low', 'close'])
        if len(df) < before:
            logger.warning(f"丢弃 {before - len(df)} 条不完整的K线数据")

        df = df.assign(volume=df['volume'].fillna(0))
        return df.sort_values('date').reset_index(drop=True)
