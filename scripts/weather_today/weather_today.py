# -*- coding: utf-8 -*-
"""
Плагин «погода на сегодня».

В заданное время публикует прогноз на ближайшие сутки (каждые 3 часа)
для точки из расписания.

Хост вызывает:
    if WeatherToday.is_valid(account, now):
        await WeatherToday(account, now, full_name).run(finish)
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from config.bot_config import AccountData
from core.models.schedule import ScheduleEntry
from core.status_poster import StatusPost
from scripts.weather_today._processes.formatter import format_forecast
from scripts.weather_today._processes.schedule_matcher import find_match
from scripts.weather_today._services.config_loader import AccountConfigCache

logger = logging.getLogger("weather_today")

FinishCallback = Callable[[bool], None]


class WeatherToday:
    config_cache = AccountConfigCache()
    status_post_factory = StatusPost

    def __init__(self, account: AccountData, now: datetime, full_name: str,
                 schedule: Optional[ScheduleEntry] = None):
        self.account = account
        self.now = now
        self.full_name = full_name
        # Запись фиксируется при создании: run() использует то же время, что и is_valid()
        self.schedule = schedule or self.find_schedule(account, now)

    @classmethod
    def find_schedule(cls, account: AccountData, now: datetime) -> Optional[ScheduleEntry]:
        config = cls.config_cache.get(account.user_id)
        return find_match(now, config.schedules)

    @classmethod
    def is_valid(cls, account: AccountData, now: datetime) -> bool:
        """Нужно ли запускать плагин для аккаунта в момент now."""
        return cls.find_schedule(account, now) is not None

    async def run(self, finish: Optional[FinishCallback] = None) -> bool:
        """
        Получает прогноз, форматирует и публикует его.

        finish вызывается ровно один раз с признаком успешной публикации,
        в том числе когда прогноз получить не удалось.
        """
        is_success = await self._tweet_weather()
        if finish is not None:
            finish(is_success)
        return is_success

    async def _tweet_weather(self) -> bool:
        if self.schedule is None:
            logger.warning(f"⚠️ [{self.full_name}] Нет расписания на {self.now:%H:%M} для {self.account.user_id}")
            return False

        forecast_client = self.config_cache.get(self.account.user_id).forecast_client
        if forecast_client is None:
            logger.error(f"❌ [{self.full_name}] Клиент прогноза не настроен для {self.account.user_id}")
            return False

        result = await forecast_client.fetch(self.schedule.location.point)
        if not result.ok:
            logger.error(f"❌ [{self.full_name}] Error occurred at getting forecast resources: {result.error}")
            return False

        post = self.status_post_factory(self.account)
        post.text = format_forecast(self.schedule, result.payload)
        logger.info(f"🌤️ [{self.full_name}] Публикуем прогноз для {self.schedule.location.name}")
        return await post.post()
