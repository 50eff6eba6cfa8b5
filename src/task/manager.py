# -*- coding: utf-8 -*-
"""
任务管理器

管理任务的增删改查和持久化（JSONL，每行一个任务）
"""
from __future__ import annotations
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from .extractor import TemporalExtractor
from .types import Task

logger = logging.getLogger('task.manager')


class TaskManager:
    """
    任务管理器

    功能：
    - CRUD 任务
    - 添加任务时自动解析日期时间
    - 完成状态切换、清理已完成任务
    - 到期检查
    """

    def __init__(
        self,
        storage_path: str = "./data/tasks.jsonl",
        extractor: Optional[TemporalExtractor] = None
    ):
        self.storage_path = Path(storage_path)
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.extractor = extractor or TemporalExtractor()
        self.tasks: dict[str, Task] = {}
        self._load_tasks()

    def _load_tasks(self):
        """从文件加载任务"""
        if not self.storage_path.exists():
            return

        try:
            with open(self.storage_path, 'r', encoding='utf-8') as f:
                for line_no, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    # 跳过损坏的行，其余任务照常加载
                    try:
                        task = Task.from_dict(json.loads(line))
                    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                        logger.error(f"加载任务失败 (第 {line_no} 行): {e}")
                        continue
                    self.tasks[task.id] = task
            logger.info(f"已加载 {len(self.tasks)} 个任务")
        except OSError as e:
            logger.error(f"加载任务失败: {e}")

    def _save_tasks(self):
        """保存任务到文件"""
        try:
            with open(self.storage_path, 'w', encoding='utf-8') as f:
                for task in self.tasks.values():
                    f.write(json.dumps(task.to_dict(), ensure_ascii=False) + '\n')
        except Exception as e:
            logger.error(f"保存任务失败: {e}")

    def add(
        self,
        text: str,
        date: str = "",
        time: str = "",
        now: Optional[datetime] = None
    ) -> Task:
        """
        添加任务

        只有在没有手动指定日期和时间时，才从文本中解析

        Args:
            text: 任务描述
            date: 手动指定的日期 (YYYY-MM-DD)
            time: 手动指定的时间 (HH:MM)
            now: 解析相对日期的参考时间，默认为当前时间

        Returns:
            创建的任务

        Raises:
            ValueError: 任务描述为空
        """
        text = (text or "").strip()
        if not text:
            raise ValueError("任务内容不能为空")

        if not date and not time:
            parsed = self.extractor.extract(text, now or datetime.now())
            if parsed.found:
                text = parsed.clean_text
                date = parsed.date
                time = parsed.time
                logger.debug(f"自动解析: date={date!r} time={time!r}")

        task = Task(text=text, date=date, time=time)
        self.tasks[task.id] = task
        self._save_tasks()

        logger.info(f"创建任务: {task.id} - {text}")
        return task

    def get(self, task_id: str) -> Optional[Task]:
        """获取任务"""
        return self.tasks.get(task_id)

    def find(self, id_prefix: str) -> Optional[Task]:
        """
        按ID前缀查找任务

        Returns:
            唯一匹配的任务，没有匹配或匹配多个时返回 None
        """
        if id_prefix in self.tasks:
            return self.tasks[id_prefix]
        matches = [t for t in self.tasks.values() if t.id.startswith(id_prefix)]
        if len(matches) == 1:
            return matches[0]
        return None

    def delete(self, task_id: str) -> bool:
        """删除任务"""
        if task_id in self.tasks:
            del self.tasks[task_id]
            self._save_tasks()
            logger.info(f"删除任务: {task_id}")
            return True
        return False

    def toggle(self, task_id: str) -> Optional[bool]:
        """
        切换任务完成状态

        Returns:
            新的完成状态，任务不存在时返回 None
        """
        task = self.tasks.get(task_id)
        if not task:
            return None

        completed = task.toggle()
        self._save_tasks()
        logger.info(f"任务 {task_id} {'已完成' if completed else '标记为未完成'}")
        return completed

    def clear_completed(self) -> list[str]:
        """
        清除所有已完成任务

        Returns:
            被清除的任务ID列表
        """
        removed = [t.id for t in self.tasks.values() if t.completed]
        for task_id in removed:
            del self.tasks[task_id]

        if removed:
            self._save_tasks()
            logger.info(f"清除了 {len(removed)} 个已完成任务")

        return removed

    def list_tasks(self, completed: Optional[bool] = None) -> list[Task]:
        """
        列出任务（按添加顺序）

        Args:
            completed: 按完成状态筛选，None 表示全部
        """
        result = list(self.tasks.values())
        if completed is not None:
            result = [t for t in result if t.completed == completed]
        return result

    def get_due_tasks(self, now: Optional[datetime] = None) -> list[Task]:
        """获取已到期的未完成任务"""
        now = now or datetime.now()
        return [t for t in self.tasks.values() if t.is_due(now)]

    def get_stats(self, now: Optional[datetime] = None) -> dict[str, Any]:
        """获取统计信息"""
        total = len(self.tasks)
        completed = len([t for t in self.tasks.values() if t.completed])
        return {
            "total": total,
            "pending": total - completed,
            "completed": completed,
            "with_reminder": len([t for t in self.tasks.values() if t.has_due()]),
            "overdue": len(self.get_due_tasks(now)),
        }
