# -*- coding: utf-8 -*-
"""
任务类型定义
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional

from src.utils.helpers import generate_id
from src.utils.validators import parse_due


@dataclass(frozen=True)
class ExtractionResult:
    """
    时间短语提取结果

    date / time 相互独立，未识别到时为空字符串
    """
    date: str = ""         # YYYY-MM-DD
    time: str = ""         # HH:MM (24小时制)
    clean_text: str = ""   # 去除时间短语后的文本

    @property
    def found(self) -> bool:
        """是否识别到任何日期或时间"""
        return bool(self.date or self.time)


@dataclass
class Task:
    """任务定义"""
    text: str
    date: str = ""          # YYYY-MM-DD
    time: str = ""          # HH:MM
    completed: bool = False

    # 标识
    id: str = field(default_factory=lambda: generate_id("task"))
    created_at: datetime = field(default_factory=datetime.now)

    def has_due(self) -> bool:
        """是否同时设置了日期和时间（只有这种任务才会提醒）"""
        return bool(self.date and self.time)

    def due_at(self) -> Optional[datetime]:
        """到期时间，日期时间组合无效时返回 None"""
        if not self.has_due():
            return None
        return parse_due(self.date, self.time)

    def is_due(self, now: datetime) -> bool:
        """是否已到期（已完成的任务不算）"""
        if self.completed:
            return False
        due = self.due_at()
        return due is not None and now >= due

    def toggle(self) -> bool:
        """切换完成状态，返回新状态"""
        self.completed = not self.completed
        return self.completed

    def to_dict(self) -> dict[str, Any]:
        """序列化"""
        return {
            "id": self.id,
            "text": self.text,
            "date": self.date,
            "time": self.time,
            "completed": self.completed,
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """反序列化"""
        return cls(
            id=data.get("id") or generate_id("task"),
            text=data["text"],
            date=data.get("date") or "",
            time=data.get("time") or "",
            completed=bool(data.get("completed", False)),
            created_at=datetime.fromisoformat(data.get("created_at", datetime.now().isoformat())),
        )
