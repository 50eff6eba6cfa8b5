# -*- coding: utf-8 -*-
"""
任务管理系统

支持：
- 从任务描述中解析日期时间（"tomorrow"、"next Monday"、"at 3pm"）
- 任务增删改查与本地持久化
- 到期检查（配合 schedule 模块提醒）
"""
from .types import Task, ExtractionResult
from .manager import TaskManager
from .extractor import TemporalExtractor, extract

__all__ = [
    'Task',
    'ExtractionResult',
    'TaskManager',
    'TemporalExtractor',
    'extract',
]
