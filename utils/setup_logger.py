import os
import sys
from datetime import datetime
from typing import Optional
from loguru import logger
from project_var import LOG_DIR


def setup_logger(
    level_console: str = "INFO",
    level_file: Optional[str] = "DEBUG",
    file_pattern: Optional[str] = None,
    log_dir: Optional[str] = None,
    rotation: str = "100 MB",
    retention: str = "30 days"
):
    """
    设置日志记录器（控制台 + 可选的轮转文件）

    Args:
        level_console: 控制台日志级别，默认 "INFO"
        level_file: 文件日志级别，默认 "DEBUG"；为 None 时只输出到控制台
        file_pattern: 日志文件名，为 None 时按启动时间生成 run_YYYYmmdd_HHMMSS.log
        log_dir: 日志目录，默认为项目下的 logs/
        rotation: 轮转条件，如 "100 MB"、"1 day"、"midnight"
        retention: 保留策略，如 "30 days" 或 "10"

    Returns:
        logger: 配置好的日志记录器
    """
    logger.remove()
    logger.add(sys.stdout, level=level_console)

    if level_file is None:
        return logger

    log_dir = log_dir or LOG_DIR
    os.makedirs(log_dir, exist_ok=True)
    if not file_pattern:
        file_pattern = f"run_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
    file_path = file_pattern if os.path.isabs(file_pattern) else os.path.join(log_dir, file_pattern)
    logger.add(
        file_path,
        level=level_file,
        encoding="utf-8",
        rotation=rotation,
        retention=retention,
        compression="zip"
    )
    return logger
