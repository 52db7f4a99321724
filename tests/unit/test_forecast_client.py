# -*- coding: utf-8 -*-
"""
Тесты для core/utils/forecast_client.py
Тестирует:
- Формирование запроса (URL, единицы)
- Кэширование ответов
- Обработку ошибок (HTTP, сеть, JSON)
"""
from datetime import timedelta

import pytest
import requests

from core.utils.error_handler import ForecastError
from core.utils.forecast_client import CACHE_TTL, ForecastClient, ForecastResult


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    def __init__(self, *responses):
        self._responses = list(responses)
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_cache_ttl_is_27m45s():
    assert CACHE_TTL == timedelta(minutes=27, seconds=45)


def test_get_builds_request(make_payload):
    payload = make_payload()
    session = FakeSession(FakeResponse(payload))
    client = ForecastClient("secret-key", session=session)

    assert client.get((35.6, 139.7)) == payload

    call = session.calls[0]
    assert call["url"] == "https://api.pirateweather.net/forecast/secret-key/35.6,139.7"
    assert call["params"]["units"] == "si"
    assert call["timeout"] == 30


def test_get_uses_cache(make_payload):
    payload = make_payload()
    session = FakeSession(FakeResponse(payload), FakeResponse(payload))
    client = ForecastClient("secret-key", service="darksky", session=session)

    client.get((35.6, 139.7))
    client.get((35.6, 139.7))

    assert len(session.calls) == 1
    assert session.calls[0]["url"].startswith("https://api.darksky.net/forecast/")


def test_get_without_cache(make_payload):
    payload = make_payload()
    session = FakeSession(FakeResponse(payload), FakeResponse(payload))
    client = ForecastClient("secret-key", cache=False, session=session)

    client.get((35.6, 139.7))
    client.get((35.6, 139.7))

    assert len(session.calls) == 2


def test_get_http_error_is_not_cached(make_payload):
    session = FakeSession(FakeResponse({"error": "forbidden"}, status_code=403), FakeResponse(make_payload()))
    client = ForecastClient("secret-key", session=session)

    with pytest.raises(ForecastError):
        client.get((35.6, 139.7))
    assert client.get((35.6, 139.7))["hourly"]["data"]
    assert len(session.calls) == 2


def test_get_network_and_json_errors():
    client = ForecastClient("secret-key", session=FakeSession(requests.ConnectionError("down")))
    with pytest.raises(ForecastError):
        client.get((35.6, 139.7))

    client = ForecastClient("secret-key", session=FakeSession(FakeResponse(ValueError("bad json"))))
    with pytest.raises(ForecastError):
        client.get((35.6, 139.7))

    client = ForecastClient("secret-key", session=FakeSession(FakeResponse(["not", "a", "dict"])))
    with pytest.raises(ForecastError):
        client.get((35.6, 139.7))


def test_unknown_service_or_units():
    with pytest.raises(ValueError):
        ForecastClient("secret-key", service="weather-of-the-future")
    with pytest.raises(ValueError):
        ForecastClient("secret-key", units="kelvin")


async def test_fetch_success(make_payload):
    payload = make_payload()
    client = ForecastClient("secret-key", session=FakeSession(FakeResponse(payload)))

    result = await client.fetch((35.6, 139.7))

    assert result.ok
    assert result.payload == payload
    assert result.error is None


async def test_fetch_error_is_returned_not_raised():
    client = ForecastClient("secret-key", session=FakeSession(requests.Timeout("timeout")))

    result = await client.fetch((35.6, 139.7))

    assert isinstance(result, ForecastResult)
    assert not result.ok
    assert result.payload is None
    assert "timeout" in result.error
