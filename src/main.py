#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Smart To-Do - 主入口

带自然语言日期解析和到期提醒的待办清单
"""
import argparse
import asyncio
import logging
import re
import sys
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

# 添加项目根目录到路径，使 src 作为包可用
sys.path.insert(0, str(Path(__file__).parent.parent))

# 加载 .env 文件
from dotenv import load_dotenv
load_dotenv(Path(__file__).parent.parent / '.env')

logger = logging.getLogger('todo')

from src.config.settings import AppConfig, load_config
from src.schedule import ConsoleNotifier, ReminderScheduler
from src.task.manager import TaskManager
from src.task.types import Task
from src.utils.helpers import format_due, truncate_text
from src.utils.validators import validate_date, validate_time

_OPTION_RE = re.compile(r'--(date|time)\s+(\S+)')


def setup_logging(level: str = "INFO", data_dir: str = "./data"):
    """设置日志"""
    Path(data_dir).mkdir(parents=True, exist_ok=True)

    log_level = getattr(logging, level.upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    # 控制台处理器 - 只显示 WARNING 及以上级别
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(levelname)s - %(message)s'))

    # 文件处理器 - 记录所有级别
    file_handler = logging.FileHandler(Path(data_dir) / 'app.log', encoding='utf-8')
    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    ))

    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    for logger_name in ['asyncio', 'task.extractor']:
        logging.getLogger(logger_name).setLevel(logging.WARNING)


class TodoApp:
    """待办清单应用"""

    def __init__(self, config: AppConfig, clock: Callable[[], datetime] = datetime.now):
        self.config = config
        self.clock = clock
        self.task_manager = TaskManager(storage_path=config.tasks_path)
        self.scheduler = ReminderScheduler(
            task_manager=self.task_manager,
            handler=ConsoleNotifier(sound=config.reminder.sound),
            interval=config.reminder.check_interval,
            clock=clock,
        )

    def _print_banner(self):
        """打印启动横幅"""
        print("\n" + "=" * 50)
        print("📋 Smart To-Do")
        print("=" * 50)
        print("直接输入任务即可添加，例如: Call mom tomorrow at 5pm")
        print("输入 /help 查看全部命令")
        print("=" * 50 + "\n")

    async def interactive(self):
        """交互模式"""
        self._print_banner()
        await self.scheduler.start()
        loop = asyncio.get_running_loop()

        try:
            while True:
                try:
                    line = await loop.run_in_executor(None, input, "👤 > ")
                except (EOFError, KeyboardInterrupt):
                    print("\n👋 再见！")
                    break

                try:
                    if self.handle_input(line):
                        break
                    # 新添加的任务可能已经到期
                    await self.scheduler.check_now()
                except Exception as e:
                    logger.error(f"命令处理错误: {e}")
                    print(f"❌ 错误: {e}")
        finally:
            await self.scheduler.stop()

    def handle_input(self, line: str) -> bool:
        """处理一行输入，返回True表示退出"""
        line = line.strip()
        if not line:
            return False

        if line.startswith('/'):
            return self._handle_command(line)

        self._add_task(line)
        return False

    def _handle_command(self, line: str) -> bool:
        """处理命令，返回True表示退出"""
        cmd, _, arg = line.partition(' ')
        cmd = cmd.lower()
        arg = arg.strip()

        if cmd in ['/quit', '/q']:
            print("👋 再见！")
            return True

        elif cmd == '/add':
            self._add_task(arg)

        elif cmd in ['/list', '/l']:
            self._show_tasks()

        elif cmd in ['/done', '/d']:
            self._toggle_task(arg)

        elif cmd in ['/delete', '/rm']:
            self._delete_task(arg)

        elif cmd == '/clear':
            removed = self.task_manager.clear_completed()
            for task_id in removed:
                self.scheduler.forget(task_id)
            print(f"🗑️ 已清除 {len(removed)} 个已完成任务")

        elif cmd in ['/status', '/s']:
            self._show_status()

        elif cmd in ['/help', '/h']:
            print("""
📋 Smart To-Do 帮助

  • 添加任务: 直接输入，如 "Pay bills in 3 days"、"Lunch at noon tomorrow"
  • 手动指定: /add <任务> [--date YYYY-MM-DD] [--time HH:MM]
  • 查看任务: /list, /l
  • 完成/取消完成: /done <id>, /d <id>
  • 删除任务: /delete <id>, /rm <id>
  • 清除已完成: /clear
  • 查看状态: /status, /s
  • 退出: /quit, /q
            """)

        else:
            print(f"❓ 未知命令: {cmd}")

        return False

    def _add_task(self, raw: str):
        """添加任务（支持 --date / --time 手动指定）"""
        options = dict(_OPTION_RE.findall(raw))
        text = _OPTION_RE.sub('', raw).strip()
        date = options.get('date', '')
        time = options.get('time', '')

        if date and not validate_date(date):
            print(f"❌ 无效的日期: {date}")
            return
        if time and not validate_time(time):
            print(f"❌ 无效的时间: {time}")
            return

        try:
            task = self.task_manager.add(text, date=date, time=time, now=self.clock())
        except ValueError as e:
            print(f"❌ {e}")
            return

        due = format_due(task.date, task.time)
        print(f"✅ 已添加 [{task.id}] {task.text}" + (f"  📅 {due}" if due else ""))

    def _resolve(self, id_prefix: str) -> Task | None:
        """按ID前缀查找任务"""
        if not id_prefix:
            print("❌ 请提供任务ID")
            return None
        task = self.task_manager.find(id_prefix)
        if task is None:
            print(f"❌ 找不到任务: {id_prefix}")
        return task

    def _toggle_task(self, id_prefix: str):
        task = self._resolve(id_prefix)
        if not task:
            return
        completed = self.task_manager.toggle(task.id)
        if completed:
            print(f"✔️ 已完成: {task.text}")
        else:
            # 重新打开的任务可以再次提醒
            self.scheduler.forget(task.id)
            print(f"↩️ 已标记为未完成: {task.text}")

    def _delete_task(self, id_prefix: str):
        task = self._resolve(id_prefix)
        if not task:
            return
        self.task_manager.delete(task.id)
        self.scheduler.forget(task.id)
        print(f"🗑️ 已删除: {task.text}")

    def _show_tasks(self):
        """显示任务列表"""
        tasks = self.task_manager.list_tasks()
        if not tasks:
            print("📋 暂无任务")
            return

        now = self.clock()
        print(f"\n📋 任务 ({len(tasks)}个):")
        print("-" * 70)

        for task in tasks:
            mark = "✔️" if task.completed else ("🔔" if task.is_due(now) else "⬜")
            print(f"{mark} [{task.id}] {truncate_text(task.text, 50)}")
            due = format_due(task.date, task.time, today=now)
            if due:
                print(f"      📅 {due}")

        print("-" * 70)

    def _show_status(self):
        """显示状态"""
        stats = self.task_manager.get_stats(now=self.clock())
        status = self.scheduler.get_status()
        print("\n📊 状态:")
        print("-" * 40)
        print(f"任务: 共 {stats['total']} | 待办 {stats['pending']} | 完成 {stats['completed']}")
        print(f"设置提醒: {stats['with_reminder']} | 已到期: {stats['overdue']}")
        print(f"提醒检查: {'运行中' if status['running'] else '未运行'} (每 {status['interval']}s)")
        print()


async def async_main():
    """异步主函数"""
    config = load_config()

    parser = argparse.ArgumentParser(description='Smart To-Do')
    parser.add_argument('-c', '--command', help='执行单次命令后退出（如 "Call mom tomorrow"）')
    parser.add_argument('--data-dir', default=config.data_dir, help='数据目录')
    parser.add_argument('--log-level', default=config.log_level, help='日志级别')
    parser.add_argument('--check-interval', type=float, default=config.reminder.check_interval, help='提醒检查间隔（秒）')
    parser.add_argument('--no-sound', action='store_true', help='提醒时不响铃')
    args = parser.parse_args()

    # 优先级：命令行参数 > 环境变量 > 默认值
    config.data_dir = args.data_dir
    config.log_level = args.log_level
    config.reminder.check_interval = args.check_interval
    if args.no_sound:
        config.reminder.sound = False

    setup_logging(config.log_level, config.data_dir)

    app = TodoApp(config)

    if args.command:
        app.handle_input(args.command)
    else:
        await app.interactive()


def main():
    """主入口"""
    asyncio.run(async_main())


if __name__ == "__main__":
    main()
