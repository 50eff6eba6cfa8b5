# -*- coding: utf-8 -*-
"""
通用辅助函数
"""
import logging
import re
import uuid
from datetime import datetime

logger = logging.getLogger('utils.helpers')

_MONTH_DAY_RE = re.compile(r'^\d{2}-\d{2}$')


def generate_id(prefix: str = "") -> str:
    """
    生成唯一ID

    Args:
        prefix: ID前缀

    Returns:
        唯一标识符
    """
    unique = uuid.uuid4().hex[:12]
    if prefix:
        return f"{prefix}_{unique}"
    return unique


def truncate_text(text: str, max_length: int = 100, suffix: str = "...") -> str:
    """
    截断文本

    Args:
        text: 原始文本
        max_length: 最大长度
        suffix: 截断后缀

    Returns:
        截断后的文本
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix


def format_date(date: str, today: datetime | None = None) -> str:
    """
    格式化日期用于显示，如 "Mon, Jan 15, 2024"

    MM-DD 格式的日期默认使用当前年份，无法解析时原样返回
    """
    if _MONTH_DAY_RE.match(date):
        year = (today or datetime.now()).year
        date = f"{year}-{date}"
    try:
        dt = datetime.strptime(date, "%Y-%m-%d")
    except ValueError:
        logger.debug(f"无法解析日期: {date}")
        return date
    return f"{dt:%a}, {dt:%b} {dt.day}, {dt.year}"


def format_time(time: str) -> str:
    """格式化时间用于显示，如 "3:00 PM"，无法解析时原样返回"""
    try:
        dt = datetime.strptime(time, "%H:%M")
    except ValueError:
        logger.debug(f"无法解析时间: {time}")
        return time
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'PM' if dt.hour >= 12 else 'AM'}"


def format_due(date: str = "", time: str = "", today: datetime | None = None) -> str:
    """
    格式化任务的日期时间

    Args:
        date: YYYY-MM-DD 或 MM-DD
        time: HH:MM
        today: 参考时间（用于补全年份）

    Returns:
        如 "Mon, Jan 15, 2024 at 3:00 PM"，都为空时返回空字符串
    """
    parts = []
    if date:
        parts.append(format_date(date, today))
    if time:
        parts.append(format_time(time))
    return " at ".join(parts)
