# -*- coding: utf-8 -*-
"""
Общие фикстуры: сброс кэша настроек плагина и генератор ответов провайдера.
"""
from datetime import datetime, timedelta

import pytest

from scripts.weather_today import WeatherToday


@pytest.fixture(autouse=True)
def reset_weather_today_cache():
    WeatherToday.config_cache.invalidate()
    yield
    WeatherToday.config_cache.invalidate()


@pytest.fixture
def make_payload():
    """
    Возвращает функцию, собирающую ответ в формате Dark Sky:
    count почасовых точек с шагом 1 час начиная со start (локальное время).
    """
    def _make(start=datetime(2024, 1, 1, 7, 0), count=24, temperature=20.4,
              precip=0.33, icon="clear-day"):
        hourly = [
            {
                "time": int((start + timedelta(hours=i)).timestamp()),
                "icon": icon,
                "temperature": temperature,
                "precipProbability": precip,
            }
            for i in range(count)
        ]
        return {
            "timezone": "Asia/Tokyo",
            "currently": dict(hourly[0]) if hourly else {},
            "hourly": {"data": hourly},
        }
    return _make
