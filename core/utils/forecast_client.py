# -*- coding: utf-8 -*-
"""
Клиент прогноза погоды в формате Dark Sky (Dark Sky, Pirate Weather).

Один запрос по координатам возвращает currently + hourly + daily.
Ответы кэшируются в памяти (cachetools.TTLCache), TTL по умолчанию 27 мин 45 сек.
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Dict, Optional, Tuple

import requests
from cachetools import TTLCache

from core.utils.error_handler import ForecastError, log_exception

logger = logging.getLogger("forecast_client")

# === КОНФИГУРАЦИЯ API ===
API_TIMEOUT = 30  # секунд
CACHE_TTL = timedelta(minutes=27, seconds=45)
CACHE_MAX_POINTS = 128

FORECAST_SERVICES = {
    "darksky": "https://api.darksky.net/forecast",
    "pirateweather": "https://api.pirateweather.net/forecast",
}

# "celcius" — написание из настроек старых версий бота
FORECAST_UNITS = {
    "celcius": "si",
    "celsius": "si",
    "fahrenheit": "us",
}


@dataclass(frozen=True)
class ForecastResult:
    """Итог одного запроса: либо payload, либо описание ошибки."""
    payload: Optional[Dict] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.payload is not None


class ForecastClient:
    """Клиент для Dark Sky-совместимых API."""

    def __init__(
        self,
        key: str,
        service: str = "pirateweather",
        units: str = "celcius",
        cache: bool = True,
        ttl: timedelta = CACHE_TTL,
        session: Optional[requests.Session] = None,
    ):
        if service not in FORECAST_SERVICES:
            raise ValueError(f"❌ Неизвестный сервис прогноза: {service}")
        if units not in FORECAST_UNITS:
            raise ValueError(f"❌ Неизвестные единицы измерения: {units}")

        self.key = key
        self.service = service
        self.units = units
        self.base_url = FORECAST_SERVICES[service]
        self.ttl = ttl
        self._session = session or requests.Session()
        self._cache = TTLCache(maxsize=CACHE_MAX_POINTS, ttl=ttl.total_seconds()) if cache else None

    def __repr__(self):
        cache = f"ttl={self.ttl}" if self._cache is not None else "off"
        return f"ForecastClient(service={self.service!r}, units={self.units!r}, cache={cache})"

    def get(self, point: Tuple[float, float]) -> Dict:
        """
        Синхронно получает прогноз для точки.

        Args:
            point: (lat, lon)

        Returns:
            dict: ответ провайдера (currently, hourly, daily, ...)

        Raises:
            ForecastError: сетевая ошибка, HTTP-статус не 2xx или невалидный JSON
        """
        lat, lon = point
        cache_key = (round(lat, 4), round(lon, 4))

        if self._cache is not None and cache_key in self._cache:
            logger.debug(f"💾 Кэш найден для ({lat}, {lon})")
            return self._cache[cache_key]

        url = f"{self.base_url}/{self.key}/{lat},{lon}"
        params = {
            "units": FORECAST_UNITS[self.units],
            "exclude": "minutely,alerts,flags",
        }

        try:
            response = self._session.get(url, params=params, timeout=API_TIMEOUT)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ForecastError(f"{self.service}: ошибка запроса для ({lat}, {lon}): {e}") from e
        except ValueError as e:
            raise ForecastError(f"{self.service}: невалидный JSON для ({lat}, {lon})") from e

        if not isinstance(data, dict):
            raise ForecastError(f"{self.service}: неожиданный формат ответа для ({lat}, {lon})")

        logger.info(f"✅ {self.service}: прогноз получен для ({lat}, {lon})")
        if self._cache is not None:
            self._cache[cache_key] = data
        return data

    async def fetch(self, point: Tuple[float, float]) -> ForecastResult:
        """
        Асинхронная обёртка над get(): одна попытка, без повторов.
        Ошибка не выбрасывается, а возвращается в ForecastResult.
        """
        try:
            payload = await asyncio.to_thread(self.get, point)
        except ForecastError as e:
            log_exception(e, "❌ Ошибка получения прогноза", context={"point": point, "service": self.service})
            return ForecastResult(error=str(e))
        return ForecastResult(payload=payload)
