# -*- coding: utf-8 -*-
"""
Плагин «погода на сегодня».
"""

from .weather_today import WeatherToday

__all__ = ["WeatherToday"]
