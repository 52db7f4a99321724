# -*- coding: utf-8 -*-
"""
Загрузка настроек плагина «погода на сегодня» из хранилища окружения.

Ключи (в пространстве имён PLUGINSBATCHWEATHERTODAY):
- SCHEDULES_<account_id>     — JSON-массив расписаний
- FORECAST_KEY_<account_id>  — ключ API прогноза
- FORECAST_SERVICE           — сервис прогноза (по умолчанию pirateweather)

Настройки кэшируются по account_id в AccountConfigCache.
"""

import json
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from core.env_store import get_env_data
from core.models.schedule import ScheduleEntry
from core.utils.forecast_client import CACHE_TTL, ForecastClient

logger = logging.getLogger("weather_today.config")

# При проверке is_valid имя плагина ещё недоступно, поэтому пространство имён — константа
PLUGIN_FULL_NAME = "PLUGINSBATCHWEATHERTODAY"
SCHEDULES_KEY = "SCHEDULES"
FORECAST_KEY = "FORECAST_KEY"
FORECAST_SERVICE_KEY = "FORECAST_SERVICE"
DEFAULT_FORECAST_SERVICE = "pirateweather"
FORECAST_UNITS = "celcius"


@dataclass(frozen=True)
class WeatherTodayConfig:
    schedules: Tuple[ScheduleEntry, ...]
    forecast_client: Optional[ForecastClient]


def load_schedules(account_id: str) -> Tuple[ScheduleEntry, ...]:
    """
    Читает и разбирает расписания аккаунта.
    При любой ошибке формата пишет предупреждение и возвращает пустой кортеж.
    """
    raw = get_env_data(PLUGIN_FULL_NAME, f"{SCHEDULES_KEY}_{account_id}")
    try:
        items = json.loads(raw)
    except ValueError as e:
        logger.warning(f"⚠️ Invalid environments data format: {SCHEDULES_KEY}_{account_id} ({e})")
        return ()

    if not isinstance(items, list):
        logger.warning(f"⚠️ {SCHEDULES_KEY}_{account_id}: ожидался JSON-массив, получено {type(items).__name__}")
        return ()

    schedules = []
    for index, item in enumerate(items):
        try:
            schedules.append(ScheduleEntry.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"⚠️ Пропущено расписание #{index} аккаунта {account_id}: {e!r}")
    return tuple(schedules)


def load_forecast_key(account_id: str) -> str:
    key = get_env_data(PLUGIN_FULL_NAME, f"{FORECAST_KEY}_{account_id}")
    if not key:
        logger.warning(f"⚠️ Could not load forecast key from environments (account {account_id})")
    return key


def build_forecast_client(key: str) -> Optional[ForecastClient]:
    """Создаёт клиент прогноза или None, если ключа нет."""
    if not key:
        return None
    service = get_env_data(PLUGIN_FULL_NAME, FORECAST_SERVICE_KEY) or DEFAULT_FORECAST_SERVICE
    try:
        return ForecastClient(
            key=key,
            service=service,
            units=FORECAST_UNITS,
            cache=True,
            ttl=CACHE_TTL,
        )
    except ValueError as e:
        logger.error(f"❌ Клиент прогноза не создан: {e}")
        return None


def load_config(account_id: str) -> WeatherTodayConfig:
    schedules = load_schedules(account_id)
    logger.debug(f"📋 scheduleList[{account_id}]: {schedules}")
    forecast_client = build_forecast_client(load_forecast_key(account_id))
    logger.debug(f"🌤️ forecast[{account_id}]: {forecast_client}")
    return WeatherTodayConfig(schedules=schedules, forecast_client=forecast_client)


class AccountConfigCache:
    """
    Кэш настроек по account_id.

    Настройки аккаунта загружаются при первом обращении и живут,
    пока их явно не сбросят через invalidate().
    """

    def __init__(self, loader=load_config):
        self._loader = loader
        self._configs: Dict[str, WeatherTodayConfig] = {}

    def get(self, account_id: str) -> WeatherTodayConfig:
        config = self._configs.get(account_id)
        if config is None:
            config = self._loader(account_id)
            self._configs[account_id] = config
        return config

    def invalidate(self, account_id: Optional[str] = None):
        """Сбрасывает настройки одного аккаунта или всех сразу."""
        if account_id is None:
            self._configs.clear()
            logger.info("🧹 Кэш настроек сброшен")
        else:
            self._configs.pop(account_id, None)
            logger.info(f"🧹 Кэш настроек сброшен для аккаунта {account_id}")

    def __contains__(self, account_id: str) -> bool:
        return account_id in self._configs
