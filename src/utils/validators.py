# -*- coding: utf-8 -*-
"""
验证工具
"""
import re
from datetime import datetime
from typing import Optional

_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_TIME_RE = re.compile(r'^\d{2}:\d{2}$')


def validate_date(date: str) -> bool:
    """
    验证日期格式 (YYYY-MM-DD) 且是真实存在的日期

    Args:
        date: 日期字符串

    Returns:
        是否有效
    """
    if not date or not _DATE_RE.match(date):
        return False
    try:
        datetime.strptime(date, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def validate_time(time: str) -> bool:
    """
    验证时间格式 (HH:MM, 24小时制)

    Args:
        time: 时间字符串

    Returns:
        是否有效
    """
    if not time or not _TIME_RE.match(time):
        return False
    hour, minute = (int(part) for part in time.split(':'))
    return 0 <= hour <= 23 and 0 <= minute <= 59


def parse_due(date: str, time: str) -> Optional[datetime]:
    """
    组合日期和时间

    Args:
        date: YYYY-MM-DD
        time: HH:MM

    Returns:
        datetime，组合无效时返回 None
    """
    if not (validate_date(date) and validate_time(time)):
        return None
    return datetime.strptime(f"{date} {time}", "%Y-%m-%d %H:%M")
