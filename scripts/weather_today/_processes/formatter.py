# -*- coding: utf-8 -*-
"""
Форматирование прогноза на сегодня в текст поста.

Пример результата:

    Tokyo forecast

    7時
    ☀️ 20℃ 33％

    10時
    ⛅️ 23℃ 10％
    ...
"""

import logging
import math
from datetime import datetime, tzinfo
from pathlib import Path
from typing import List, NamedTuple, Optional

from jinja2 import Template

from core.models.schedule import ScheduleEntry

logger = logging.getLogger("formatter")

INTERVAL_HOURS = 3  # шаг между показываемыми часами
SLOT_COUNT = 8      # сколько часов показываем
MAX_TEXT_LENGTH = 140
ELLIPSIS = "…"
FAILURE_TEXT = "forecast retrieval failed"

UNKNOWN_EMOJI = "❓"
EMOJI_BY_ICON = {
    "clear-day": "☀️",
    "clear-night": "🌙",
    "rain": "🌧",
    "snow": "☃️",
    "sleet": "🌨",
    "wind": "💨",
    "fog": "🌫",
    "cloudy": "☁️",
    "partly-cloudy-day": "⛅️",
    "partly-cloudy-night": "☁️",
}

TEMPLATE_PATH = Path(__file__).parent.parent / "_io" / "templates" / "weather_today.txt.j2"
with open(TEMPLATE_PATH, "r", encoding="utf-8") as f:
    WEATHER_TODAY_TEMPLATE = Template(f.read())


class ForecastSlot(NamedTuple):
    hour: int
    emoji: str
    temperature: int
    precipitation: int


def get_emoji(icon: Optional[str]) -> str:
    return EMOJI_BY_ICON.get(icon, UNKNOWN_EMOJI)


def round_half_up(value: float) -> int:
    # round() в Python банковский: round(20.5) == 20
    return int(math.floor(value + 0.5))


def truncate_text(text: str, limit: int = MAX_TEXT_LENGTH) -> str:
    """Обрезает текст до limit символов, последний символ — многоточие."""
    if len(text) <= limit:
        return text
    return text[:limit - 1] + ELLIPSIS


def _build_slots(hourly: list, tz: Optional[tzinfo]) -> List[ForecastSlot]:
    slots = []
    for i in range(SLOT_COUNT):
        data = hourly[i * INTERVAL_HOURS]
        time = datetime.fromtimestamp(data["time"], tz)
        slots.append(ForecastSlot(
            hour=time.hour,
            emoji=get_emoji(data.get("icon")),
            temperature=round_half_up(data["temperature"]),
            precipitation=round_half_up(data.get("precipProbability", 0) * 100),
        ))
    return slots


def format_forecast(schedule: ScheduleEntry, payload: dict, tz: Optional[tzinfo] = None) -> str:
    """
    Формирует текст поста по ответу провайдера.

    Args:
        schedule: сработавшая запись расписания (нужно имя локации)
        payload: ответ провайдера в формате Dark Sky
        tz: часовой пояс для часов в тексте (None — локальное время хоста)

    Returns:
        str: текст не длиннее MAX_TEXT_LENGTH символов, либо FAILURE_TEXT,
        если почасовых данных меньше INTERVAL_HOURS * SLOT_COUNT
    """
    hourly = ((payload or {}).get("hourly") or {}).get("data") or []
    required = INTERVAL_HOURS * SLOT_COUNT

    if len(hourly) < required:
        logger.warning(f"⚠️ Недостаточно почасовых данных: {len(hourly)} < {required}")
        return FAILURE_TEXT

    try:
        slots = _build_slots(hourly, tz)
    except (AttributeError, KeyError, OverflowError, TypeError, ValueError) as e:
        logger.warning(f"⚠️ Некорректные почасовые данные: {e!r}")
        return FAILURE_TEXT

    text = WEATHER_TODAY_TEMPLATE.render(location_name=schedule.location.name, slots=slots)
    return truncate_text(text)
