# -*- coding: utf-8 -*-
"""
提醒通知
"""
import sys
from typing import TextIO

from src.task.types import Task
from src.utils.helpers import format_due


class ConsoleNotifier:
    """
    控制台通知

    打印提醒消息，可选响铃代替提示音
    """

    def __init__(self, sound: bool = True, stream: TextIO | None = None):
        self.sound = sound
        self.stream = stream or sys.stdout

    def __call__(self, task: Task):
        bell = "\a" if self.sound else ""
        due = format_due(task.date, task.time)
        self.stream.write(f"{bell}\n⏰ 提醒: 任务 \"{task.text}\" 已到期! ({due})\n")
        self.stream.flush()
