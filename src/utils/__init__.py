# -*- coding: utf-8 -*-
"""
工具模块

通用工具函数和辅助类
"""

from .helpers import generate_id, truncate_text, format_due
from .validators import validate_date, validate_time, parse_due

__all__ = [
    'generate_id',
    'truncate_text',
    'format_due',
    'validate_date',
    'validate_time',
    'parse_due',
]
