"""
Excel 表格转换器

负责把 Excel 第一个 Sheet 读出的 DataFrame 清洗为以规范表头为键的行
"""

from typing import Any, Dict, List
import pandas as pd
from loguru import logger

from core.common.exceptions import TransformerException
from core.transformers.base import BaseTransformer
from core.transformers.stock_row import is_empty, to_key_text
from utils.date_helper import DateHelper
from utils.stock_code_helper import StockCodeHelper


class SpreadsheetTransformer(BaseTransformer):
    """
    Excel 表格转换器

    - 删除全空行（通常是表格末尾的空白行）
    - T日 列的 Excel 序列号转换为 YYYY-MM-DD
    - 股票列 "2 富信科技688662.SH" 拆分为名称和代码
    - 旧表头重命名为规范表头
    """

    def transform(self, data: pd.DataFrame) -> List[Dict[str, Any]]:
        """
        转换 Excel 数据

        Args:
            data: 第一行为表头的 DataFrame

        Returns:
            List[Dict[str, Any]]: 以规范表头为键的行，可直接交给行映射器

        Raises:
            TransformerException: 转换失败时抛出异常
        """
        if data is None or data.empty:
            logger.warning("输入数据为空")
            return []

        logger.info(f"开始转换 Excel 数据，数据量: {len(data)}")

        try:
            df = data.copy()
            df.columns = [str(column).strip() for column in df.columns]
            df = self._drop_empty_rows(df)

            date_name = self.schema.date_field.name
            code_name = self.schema.code_field.name
            stock_name = self.schema.name_field.name

            if date_name in df.columns:
                df[date_name] = df[date_name].map(DateHelper.excel_serial_to_date)

            if stock_name in df.columns:
                df = self._split_stock_column(df, stock_name, code_name)

            df = self._rename_columns(df, dict(self.schema.legacy_mapping))

            unknown = [column for column in df.columns if self.schema.canonical_name(column) is None]
            if unknown:
                logger.warning(f"忽略无法识别的列: {unknown}")

            df = df.astype(object).where(pd.notna(df), None)
            records = df.to_dict('records')
            logger.info(f"转换完成，共 {len(records)} 行")
            return records

        except Exception as e:
            logger.error(f"转换 Excel 数据失败: {e}")
            raise TransformerException(f"转换 Excel 数据失败: {e}") from e

    @staticmethod
    def _split_stock_column(df: pd.DataFrame, stock_name: str, code_name: str) -> pd.DataFrame:
        """解析股票列，名称写回股票列，代码写入代码列（已有代码时保留）"""
        parsed = df[stock_name].map(StockCodeHelper.parse_composite_name_code)
        existing_codes = df[code_name] if code_name in df.columns else pd.Series([None] * len(df), index=df.index)

        df = df.assign(**{
            stock_name: [item.name for item in parsed],
            code_name: [
                item.code or (None if is_empty(existing) else to_key_text(existing))
                for item, existing in zip(parsed, existing_codes)
            ],
        })
        logger.debug("股票列解析完成")
        return df
