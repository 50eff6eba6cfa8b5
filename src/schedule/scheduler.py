# -*- coding: utf-8 -*-
"""
提醒调度器

定时轮询任务列表，到期的任务触发一次提醒
"""
import asyncio
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any, Optional

from src.task.manager import TaskManager
from src.task.types import Task

from .triggers import AlarmTrigger

logger = logging.getLogger('schedule.scheduler')


class ReminderScheduler:
    """
    提醒调度器

    Example:
        scheduler = ReminderScheduler(manager, ConsoleNotifier(), interval=5)
        await scheduler.start()
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        task_manager: TaskManager,
        handler: Callable[[Task], Any],
        interval: float = 5,
        clock: Callable[[], datetime] = datetime.now
    ):
        """
        Args:
            task_manager: 任务管理器
            handler: 提醒处理函数，接收到期的 Task
            interval: 检查间隔（秒）
            clock: 时钟函数（测试时可替换）
        """
        if interval <= 0:
            raise ValueError(f"检查间隔必须大于0: {interval}")

        self.task_manager = task_manager
        self.trigger = AlarmTrigger(handler)
        self.interval = interval
        self.clock = clock
        self._running = False
        self._task: Optional[asyncio.Task] = None

    async def start(self):
        """启动调度器（后台运行）"""
        if self._running:
            logger.warning("调度器已在运行")
            return

        self._running = True
        self._task = asyncio.create_task(self._run(), name="reminder_checker")
        logger.info(f"调度器启动 (间隔: {self.interval}s)")

    async def stop(self):
        """停止调度器"""
        self._running = False

        if self._task:
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None

        logger.info("调度器停止")

    async def _run(self):
        """轮询循环"""
        while self._running:
            try:
                await self.check_now()
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"提醒检查失败: {e}")

            await asyncio.sleep(self.interval)

    async def check_now(self, now: Optional[datetime] = None) -> list[Task]:
        """
        立即检查一次

        Args:
            now: 当前时间，默认使用 clock()

        Returns:
            本次触发的任务
        """
        now = now or self.clock()
        tasks = self.task_manager.list_tasks(completed=False)
        fired = await self.trigger.check(tasks, now)
        if fired:
            logger.debug(f"触发了 {len(fired)} 个提醒")
        return fired

    def forget(self, task_id: str):
        """任务被删除或重新打开时调用，允许再次提醒"""
        self.trigger.reset(task_id)

    @property
    def is_running(self) -> bool:
        return self._running

    def get_status(self) -> dict[str, Any]:
        """获取调度器状态"""
        return {
            "running": self._running,
            "interval": self.interval,
            "triggered": len(self.trigger.triggered),
        }
