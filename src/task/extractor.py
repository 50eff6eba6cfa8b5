# -*- coding: utf-8 -*-
"""
时间短语提取器

从任务描述中识别自然语言的日期/时间短语：
- 时间: "at 5pm"、"8am"、"14:30"、"noon"、"midnight"、"at 5"
- 日期: "today"、"tomorrow"、"next Monday"、"on Friday"、"in 3 days"

先提取时间再提取日期（日期短语里的数字不会被误认成时间），
每一步都会把匹配到的短语从文本中删掉。
"""
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Optional

from .types import ExtractionResult

logger = logging.getLogger('task.extractor')

# 星期索引: Sunday=0 ... Saturday=6
WEEKDAYS = (
    'sunday', 'monday', 'tuesday', 'wednesday',
    'thursday', 'friday', 'saturday',
)

_WEEKDAY_ALT = '|'.join(WEEKDAYS)

TIME_PATTERN = re.compile(
    # 14:30 / 5:30pm / at 9:15
    r'(?:\bat\s+)?\b(?P<hm_hour>[01]?\d|2[0-3]):(?P<hm_minute>[0-5]\d)(?:\s*(?P<hm_meridiem>am|pm))?\b'
    # 5pm / at 11 am / 15pm（已是24小时制的小时保持不变）
    r'|(?:\bat\s+)?\b(?P<ap_hour>2[0-3]|[01]?\d)\s*(?P<ap_meridiem>am|pm)\b'
    # at 5（必须带 at，否则 "in 3 days" 里的 3 会被当成时间）
    r'|\bat\s+(?P<bare_hour>[01]?\d|2[0-3])\b(?!:)'
    # noon / midnight
    r'|(?:\bat\s+)?\b(?P<word>noon|midnight)\b',
    re.IGNORECASE,
)

DATE_PATTERN = re.compile(
    r'\b(?:'
    r'(?P<today>today)'
    r'|(?P<tomorrow>tomorrow)'
    rf'|next\s+(?P<next>{_WEEKDAY_ALT})'
    rf'|on\s+(?P<on>{_WEEKDAY_ALT})'
    r'|in\s+(?P<days>\d+)\s+days?'
    r')\b',
    re.IGNORECASE,
)

TIME_WORDS = {
    'noon': (12, 0),
    'midnight': (0, 0),
}


@dataclass(frozen=True)
class TimeMatch:
    """时间匹配（中间结果）"""
    phrase: str     # 原文中匹配到的短语（含 "at"）
    value: str      # HH:MM
    start: int
    end: int


@dataclass(frozen=True)
class DateMatch:
    """日期匹配（中间结果）"""
    phrase: str
    category: str                   # today|tomorrow|next-weekday|on-weekday|in-n-days
    value: str                      # YYYY-MM-DD，无法计算时为空
    start: int
    end: int
    weekday: Optional[str] = None
    days: Optional[int] = None


def weekday_index(dt: datetime) -> int:
    """Sunday=0 ... Saturday=6"""
    return dt.isoweekday() % 7


def strip_phrase(text: str, start: int, end: int) -> str:
    """删除 text[start:end]，合并两侧空白"""
    head = text[:start].rstrip()
    tail = text[end:].lstrip()
    return f"{head} {tail}".strip()


def _day_count(digits: str) -> Optional[int]:
    """in N days 的天数，超过 timedelta 上限时返回 None"""
    if len(digits.lstrip('0')) > 9:
        return None
    return int(digits)


def _days_until(weekday: str, now: datetime, allow_today: bool) -> Optional[int]:
    """
    计算距离目标星期几的天数

    Args:
        weekday: 星期名称（小写）
        now: 参考时间
        allow_today: "on <weekday>" 允许当天，"next <weekday>" 不允许

    Returns:
        天数，星期名称无效时返回 None
    """
    if weekday not in WEEKDAYS:
        return None
    diff = WEEKDAYS.index(weekday) - weekday_index(now)
    if diff < 0 or (diff == 0 and not allow_today):
        diff += 7
    return diff


class TemporalExtractor:
    """
    时间短语提取器

    纯函数：只依赖传入的文本和参考时间，不读取系统时钟。

    Example:
        extractor = TemporalExtractor()
        result = extractor.extract("Lunch at noon tomorrow", datetime(2024, 1, 15))
        # ExtractionResult(date='2024-01-16', time='12:00', clean_text='Lunch')
    """

    def __init__(self):
        # 日期类别 -> 偏移天数计算，按优先级排列
        self._date_resolvers: list[tuple[str, str, Callable[[re.Match, datetime], Optional[int]]]] = [
            ("today", "today", lambda m, now: 0),
            ("tomorrow", "tomorrow", lambda m, now: 1),
            ("next", "next-weekday", lambda m, now: _days_until(m.group("next").lower(), now, allow_today=False)),
            ("on", "on-weekday", lambda m, now: _days_until(m.group("on").lower(), now, allow_today=True)),
            ("days", "in-n-days", lambda m, now: _day_count(m.group("days"))),
        ]

    def extract(self, text: str, now: datetime) -> ExtractionResult:
        """
        从文本中提取日期和时间

        Args:
            text: 任务描述
            now: 参考时间（由调用方提供）

        Returns:
            ExtractionResult
        """
        working = (text or "").strip()
        date = ""
        time = ""

        # 1. 先提取时间
        time_match = self.match_time(working)
        if time_match:
            time = time_match.value
            working = strip_phrase(working, time_match.start, time_match.end)
            logger.debug(f"识别时间: '{time_match.phrase}' -> {time}")

        # 2. 再从剩余文本中提取日期
        date_match = self.match_date(working, now)
        if date_match:
            date = date_match.value
            working = strip_phrase(working, date_match.start, date_match.end)
            logger.debug(f"识别日期: '{date_match.phrase}' ({date_match.category}) -> {date or '无效'}")

        return ExtractionResult(date=date, time=time, clean_text=working)

    def match_time(self, text: str) -> Optional[TimeMatch]:
        """匹配第一个时间短语"""
        match = TIME_PATTERN.search(text)
        if not match:
            return None

        groups = match.groupdict()
        if groups["word"]:
            hour, minute = TIME_WORDS[groups["word"].lower()]
        else:
            if groups["hm_hour"] is not None:
                hour, minute = int(groups["hm_hour"]), int(groups["hm_minute"])
                meridiem = groups["hm_meridiem"]
            elif groups["ap_hour"] is not None:
                hour, minute = int(groups["ap_hour"]), 0
                meridiem = groups["ap_meridiem"]
            else:
                # 不带 am/pm 的小时按字面值处理
                hour, minute = int(groups["bare_hour"]), 0
                meridiem = None

            if meridiem:
                meridiem = meridiem.lower()
                if meridiem == "pm" and hour < 12:
                    hour += 12
                elif meridiem == "am" and hour == 12:
                    hour = 0

        return TimeMatch(
            phrase=match.group(0),
            value=f"{hour:02d}:{minute:02d}",
            start=match.start(),
            end=match.end(),
        )

    def match_date(self, text: str, now: datetime) -> Optional[DateMatch]:
        """匹配第一个日期短语并换算成 YYYY-MM-DD"""
        match = DATE_PATTERN.search(text)
        if not match:
            return None

        today = now.replace(hour=0, minute=0, second=0, microsecond=0)

        for group, category, resolve in self._date_resolvers:
            if match.group(group) is None:
                continue

            offset = resolve(match, now)
            value = ""
            if offset is not None:
                try:
                    value = (today + timedelta(days=offset)).strftime("%Y-%m-%d")
                except OverflowError:
                    # 超出日期范围，按无日期处理（短语仍然删除）
                    logger.debug(f"日期超出范围: '{match.group(0)}'")
            return DateMatch(
                phrase=match.group(0),
                category=category,
                value=value,
                start=match.start(),
                end=match.end(),
                weekday=(match.group("next") or match.group("on") or "").lower() or None,
                days=_day_count(match.group("days")) if match.group("days") else None,
            )

        return None


_default_extractor = TemporalExtractor()


def extract(text: str, now: datetime) -> ExtractionResult:
    """使用默认提取器解析文本"""
    return _default_extractor.extract(text, now)
