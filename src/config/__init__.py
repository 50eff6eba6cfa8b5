# -*- coding: utf-8 -*-
"""
配置管理模块
"""
from .settings import (
    AppConfig,
    ReminderConfig,
    load_config,
)

__all__ = [
    'AppConfig',
    'ReminderConfig',
    'load_config',
]
