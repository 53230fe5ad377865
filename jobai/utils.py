# jobai/utils.py - 工具函数
import logging
from datetime import datetime
from typing import Optional

import pytz

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(name: str = "jobai") -> logging.Logger:
    """设置日志记录器"""
    logger = logging.getLogger(name)
    logger.setLevel(logging.INFO)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def to_datetime(epoch: Optional[float], timezone: str = "Asia/Shanghai") -> datetime:
    """epoch 秒转为带时区的时间；缺失或为 0 时取当前时间"""
    tz = pytz.timezone(timezone)
    if epoch and epoch > 0:
        try:
            return datetime.fromtimestamp(epoch, tz)
        except (OverflowError, OSError, ValueError) as e:
            setup_logger(__name__).warning(f"⚠️ 无法识别的时间戳 {epoch!r}，改用当前时间: {e}")
    return datetime.now(tz)


def now(timezone: str = "Asia/Shanghai") -> datetime:
    return datetime.now(pytz.timezone(timezone))


def set_log_level(level, prefix: str = "jobai") -> None:
    """调整所有 jobai.* 日志记录器的级别"""
    for name in list(logging.root.manager.loggerDict):
        if name == prefix or name.startswith(prefix + "."):
            logging.getLogger(name).setLevel(level)
