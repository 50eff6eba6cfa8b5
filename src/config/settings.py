# -*- coding: utf-8 -*-
"""
配置管理
"""
import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class ReminderConfig:
    """提醒配置"""
    check_interval: float = 5.0  # 检查间隔（秒）
    sound: bool = True           # 提醒时响铃


@dataclass
class AppConfig:
    """应用配置"""
    data_dir: str = "./data"
    log_level: str = "INFO"
    reminder: Optional[ReminderConfig] = None

    def __post_init__(self) -> None:
        if self.reminder is None:
            self.reminder = ReminderConfig()

    @property
    def tasks_path(self) -> str:
        """任务存储文件"""
        return os.path.join(self.data_dir, "tasks.jsonl")

    @property
    def log_path(self) -> str:
        """日志文件"""
        return os.path.join(self.data_dir, "app.log")


def load_config() -> AppConfig:
    """
    加载配置（从环境变量和默认值）

    Raises:
        ValueError: 检查间隔不是正数
    """
    interval = os.environ.get('ALARM_CHECK_INTERVAL', '5')
    try:
        check_interval = float(interval)
    except ValueError:
        raise ValueError(f"无效的 ALARM_CHECK_INTERVAL: {interval}") from None
    if check_interval <= 0:
        raise ValueError(f"ALARM_CHECK_INTERVAL 必须大于0: {interval}")

    reminder = ReminderConfig(
        check_interval=check_interval,
        sound=os.environ.get('ALARM_SOUND', 'true').lower() == 'true',
    )

    return AppConfig(
        data_dir=os.environ.get('DATA_DIR', './data'),
        log_level=os.environ.get('LOG_LEVEL', 'INFO'),
        reminder=reminder,
    )
