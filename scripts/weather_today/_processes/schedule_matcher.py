# -*- coding: utf-8 -*-
"""
Поиск записи расписания, совпадающей с текущим временем.
"""
from datetime import datetime
from typing import Iterable, Optional

from core.models.schedule import ScheduleEntry


def find_match(now: datetime, schedules: Iterable[ScheduleEntry]) -> Optional[ScheduleEntry]:
    """
    Возвращает первую запись, у которой часы и минуты совпадают с now.

    Время берётся как есть (локальное время хоста), без приведения к часовому поясу.
    При нескольких совпадениях побеждает первая по порядку в списке.
    """
    hours, minutes = now.hour, now.minute
    return next(
        (s for s in schedules or () if s and s.hours == hours and s.minutes == minutes),
        None,
    )
