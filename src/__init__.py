# -*- coding: utf-8 -*-
"""
Smart To-Do

带到期提醒的单用户待办清单
核心特性：
- 从任务描述中解析自然语言日期时间
- 本地 JSONL 持久化
- 到期提醒（每个任务只提醒一次）
"""

__version__ = "1.0.0"
__author__ = "Smart To-Do Team"

# 核心模块导出
from src.task.extractor import TemporalExtractor
from src.task.manager import TaskManager
from src.schedule.scheduler import ReminderScheduler

__all__ = [
    "TemporalExtractor",
    "TaskManager",
    "ReminderScheduler",
    "__version__",
]
