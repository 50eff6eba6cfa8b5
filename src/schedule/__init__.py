# -*- coding: utf-8 -*-
"""
提醒调度系统

支持：
- 定时轮询到期任务
- 每个任务只提醒一次（可重置）
- 控制台通知
"""
from .scheduler import ReminderScheduler
from .triggers import AlarmTrigger
from .notifiers import ConsoleNotifier

__all__ = [
    'ReminderScheduler',
    'AlarmTrigger',
    'ConsoleNotifier',
]
