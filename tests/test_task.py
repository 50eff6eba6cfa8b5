# -*- coding: utf-8 -*-
"""
任务系统测试
"""
import json
import pytest
import tempfile
from datetime import datetime
from pathlib import Path

from src.task.types import Task
from src.task.manager import TaskManager

MONDAY = datetime(2024, 1, 15, 9, 30)


class TestTaskTypes:
    """测试任务类型"""

    def test_task_creation(self):
        """测试任务创建"""
        task = Task(text="测试任务", date="2024-01-16", time="15:00")

        assert task.text == "测试任务"
        assert task.completed is False
        assert task.id.startswith("task_")
        assert task.has_due()

    def test_toggle(self):
        """测试切换完成状态"""
        task = Task(text="测试任务")
        assert task.toggle() is True
        assert task.completed
        assert task.toggle() is False

    def test_due_at(self):
        """测试到期时间"""
        task = Task(text="x", date="2024-01-16", time="15:00")
        assert task.due_at() == datetime(2024, 1, 16, 15, 0)

    def test_due_at_requires_date_and_time(self):
        """只有日期或时间时没有到期时间"""
        assert Task(text="x", date="2024-01-16").due_at() is None
        assert Task(text="x", time="15:00").due_at() is None

    def test_invalid_composite(self):
        """无效的日期时间组合"""
        task = Task(text="x", date="2024-02-30", time="10:00")
        assert task.has_due()
        assert task.due_at() is None
        assert not task.is_due(datetime(2030, 1, 1))

    def test_is_due(self):
        """测试是否到期"""
        task = Task(text="x", date="2024-01-15", time="09:00")
        assert task.is_due(MONDAY)
        assert not task.is_due(datetime(2024, 1, 15, 8, 59))

        task.completed = True
        assert not task.is_due(MONDAY)

    def test_serialization(self):
        """测试序列化"""
        task = Task(text="Call mom", date="2024-01-16", time="", completed=True)
        data = task.to_dict()

        assert data["text"] == "Call mom"
        assert data["completed"] is True
        assert set(data) == {"id", "text", "date", "time", "completed", "created_at"}

        restored = Task.from_dict(data)
        assert restored == task

    def test_from_dict_defaults(self):
        """缺省字段"""
        task = Task.from_dict({"id": "task-1", "text": "old", "date": None})
        assert task.id == "task-1"
        assert task.date == ""
        assert task.time == ""
        assert task.completed is False


class TestTaskManager:
    """测试任务管理器"""

    @pytest.fixture
    def storage_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir) / "tasks.jsonl"

    @pytest.fixture
    def manager(self, storage_path):
        return TaskManager(str(storage_path))

    def test_add_parses_text(self, manager):
        """添加任务时自动解析"""
        task = manager.add("Call mom tomorrow at 5pm", now=MONDAY)

        assert task.text == "Call mom"
        assert task.date == "2024-01-16"
        assert task.time == "17:00"
        assert task.id in manager.tasks

    def test_add_without_phrase(self, manager):
        """没有时间短语"""
        task = manager.add("  Buy milk  ", now=MONDAY)
        assert task.text == "Buy milk"
        assert task.date == ""
        assert task.time == ""

    def test_add_with_out_of_range_day_count(self, manager):
        """天数过大时仍能添加任务，只是没有日期"""
        task = manager.add("Retire in 99999999 days", now=MONDAY)
        assert task.date == ""
        assert task.time == ""
        assert manager.get(task.id) is task

    def test_manual_values_skip_parsing(self, manager):
        """手动指定日期时间时不解析文本"""
        task = manager.add("Call mom tomorrow", time="08:00", now=MONDAY)

        assert task.text == "Call mom tomorrow"
        assert task.date == ""
        assert task.time == "08:00"

    def test_add_empty_raises(self, manager):
        """空任务"""
        with pytest.raises(ValueError):
            manager.add("   ")

    def test_toggle(self, manager):
        """测试切换完成状态"""
        task = manager.add("Task", now=MONDAY)

        assert manager.toggle(task.id) is True
        assert manager.get(task.id).completed
        assert manager.toggle(task.id) is False
        assert manager.toggle("missing") is None

    def test_delete(self, manager):
        """测试删除"""
        task = manager.add("Task", now=MONDAY)

        assert manager.delete(task.id) is True
        assert manager.get(task.id) is None
        assert manager.delete(task.id) is False

    def test_clear_completed(self, manager):
        """测试清除已完成任务"""
        t1 = manager.add("任务1", now=MONDAY)
        t2 = manager.add("任务2", now=MONDAY)
        t3 = manager.add("任务3", now=MONDAY)
        manager.toggle(t1.id)
        manager.toggle(t3.id)

        removed = manager.clear_completed()

        assert sorted(removed) == sorted([t1.id, t3.id])
        assert [t.id for t in manager.list_tasks()] == [t2.id]

    def test_list_tasks_by_status(self, manager):
        """测试按状态列出任务"""
        t1 = manager.add("任务1", now=MONDAY)
        manager.add("任务2", now=MONDAY)
        manager.add("任务3", now=MONDAY)
        manager.toggle(t1.id)

        assert len(manager.list_tasks()) == 3
        assert len(manager.list_tasks(completed=False)) == 2
        assert len(manager.list_tasks(completed=True)) == 1

    def test_find_by_prefix(self, manager):
        """按ID前缀查找"""
        task = manager.add("Task", now=MONDAY)

        assert manager.find(task.id) is task
        assert manager.find(task.id[:9]) is task
        assert manager.find("nope") is None

    def test_find_ambiguous_prefix(self, manager):
        """前缀匹配多个任务时返回 None"""
        manager.add("A", now=MONDAY)
        manager.add("B", now=MONDAY)
        assert manager.find("task_") is None

    def test_get_due_tasks(self, manager):
        """测试到期任务"""
        due = manager.add("Standup at 9am today", now=MONDAY)
        manager.add("Later at 5pm today", now=MONDAY)
        manager.add("No reminder", now=MONDAY)

        assert manager.get_due_tasks(MONDAY) == [due]

    def test_persistence(self, storage_path):
        """测试持久化"""
        manager = TaskManager(str(storage_path))
        task = manager.add("Pay bills in 3 days", now=MONDAY)
        manager.toggle(task.id)

        lines = storage_path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["date"] == "2024-01-18"

        reloaded = TaskManager(str(storage_path))
        restored = reloaded.get(task.id)
        assert restored.text == "Pay bills"
        assert restored.completed is True

    def test_corrupt_file_is_logged(self, storage_path, caplog):
        """损坏的存储文件不会导致崩溃"""
        storage_path.write_text("{not json\n", encoding="utf-8")

        manager = TaskManager(str(storage_path))

        assert manager.list_tasks() == []
        assert "加载任务失败" in caplog.text

    def test_corrupt_line_keeps_other_tasks(self, storage_path, caplog):
        """损坏的行被跳过，其余任务不会丢失"""
        first = Task(id="task_a", text="A")
        second = Task(id="task_b", text="B")
        storage_path.write_text(
            json.dumps(first.to_dict()) + "\n"
            + "{bad\n"
            + json.dumps({"id": "task_x"}) + "\n"
            + json.dumps(second.to_dict()) + "\n",
            encoding="utf-8",
        )

        manager = TaskManager(str(storage_path))

        assert [t.id for t in manager.list_tasks()] == ["task_a", "task_b"]
        assert "第 2 行" in caplog.text
        assert "第 3 行" in caplog.text

        # 再次保存后原有任务仍然存在
        manager.add("C", now=MONDAY)
        reloaded = TaskManager(str(storage_path))
        assert [t.text for t in reloaded.list_tasks()] == ["A", "B", "C"]

    def test_stats(self, manager):
        """测试统计"""
        t1 = manager.add("Call mom tomorrow at 5pm", now=MONDAY)
        manager.add("Buy milk", now=MONDAY)
        manager.toggle(t1.id)

        stats = manager.get_stats()
        assert stats["total"] == 2
        assert stats["pending"] == 1
        assert stats["completed"] == 1
        assert stats["with_reminder"] == 1

    def test_stats_overdue_uses_given_time(self, manager):
        """到期数量按传入的时间计算"""
        manager.add("Standup at 9am today", now=MONDAY)

        assert manager.get_stats(now=MONDAY)["overdue"] == 1
        assert manager.get_stats(now=datetime(2024, 1, 15, 8, 0))["overdue"] == 0
