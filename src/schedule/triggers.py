# -*- coding: utf-8 -*-
"""
触发器定义
"""
import inspect
import logging
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from src.task.types import Task

logger = logging.getLogger('schedule.triggers')


class AlarmTrigger:
    """
    到期提醒触发器

    每个任务只提醒一次，直到调用 reset()（任务被删除或重新标记为未完成）
    """

    def __init__(self, handler: Callable[[Task], Any]):
        self.handler = handler
        self.triggered: set[str] = set()

    async def check(self, tasks: Iterable[Task], now: datetime) -> list[Task]:
        """
        检查任务并触发到期提醒

        Args:
            tasks: 待检查的任务
            now: 当前时间

        Returns:
            本次触发的任务列表
        """
        fired = []
        for task in tasks:
            if task.completed or not task.has_due():
                continue
            if task.id in self.triggered:
                continue

            due = task.due_at()
            if due is None:
                logger.debug(f"任务 {task.id} 的日期时间无效: {task.date} {task.time}")
                continue

            if now >= due:
                await self.fire(task)
                fired.append(task)

        return fired

    async def fire(self, task: Task):
        """触发提醒（处理器出错不影响其他任务）"""
        self.triggered.add(task.id)
        logger.info(f"任务到期: {task.id} - {task.text}")

        try:
            if inspect.iscoroutinefunction(self.handler):
                await self.handler(task)
            else:
                self.handler(task)
        except Exception as e:
            logger.error(f"提醒处理失败 ({task.id}): {e}")

    def reset(self, task_id: str):
        """允许任务再次提醒"""
        self.triggered.discard(task_id)

    def is_triggered(self, task_id: str) -> bool:
        """是否已经提醒过"""
        return task_id in self.triggered
