# -*- coding: utf-8 -*-
"""
Тесты для workers/plugin_worker.py
"""
from datetime import datetime, timedelta

import pytest

from config.bot_config import AccountData
from workers import plugin_worker as worker

ACCOUNTS = [
    AccountData(user_id="1001", screen_name="a", chat_id="@a", token="t"),
    AccountData(user_id="1002", screen_name="b", chat_id="@b", token="t"),
]


class RecordingPlugin:
    runs = []
    valid_for = {"1001"}

    def __init__(self, account, now, full_name):
        self.account = account
        self.now = now
        self.full_name = full_name

    @classmethod
    def is_valid(cls, account, now):
        return account.user_id in cls.valid_for

    async def run(self, finish):
        RecordingPlugin.runs.append((self.full_name, self.account.user_id, self.now))
        finish(True)
        return True


class BrokenPlugin(RecordingPlugin):
    async def run(self, finish):
        raise RuntimeError("boom")


async def test_run_batch_plugins_runs_only_valid():
    RecordingPlugin.runs = []
    now = datetime(2024, 1, 1, 7, 30)

    results = await worker.run_batch_plugins(ACCOUNTS, {"Recording": RecordingPlugin}, now)

    assert results == [True]
    assert RecordingPlugin.runs == [("Recording", "1001", now)]


async def test_run_batch_plugins_isolates_failures():
    RecordingPlugin.runs = []
    plugins = {"Broken": BrokenPlugin, "Recording": RecordingPlugin}

    results = await worker.run_batch_plugins(ACCOUNTS, plugins, datetime(2024, 1, 1, 7, 30))

    assert results == [False, True]
    assert len(RecordingPlugin.runs) == 1


class StopWorker(Exception):
    pass


async def test_plugin_worker_runs_once_per_minute():
    RecordingPlugin.runs = []
    ticks = iter([
        datetime(2024, 1, 1, 7, 30, 0, 500),
        datetime(2024, 1, 1, 7, 30, 1),
        datetime(2024, 1, 1, 7, 30, 59, 900000),
        datetime(2024, 1, 1, 7, 30, 59, 950000),
        datetime(2024, 1, 1, 7, 31, 0, 10),
        datetime(2024, 1, 1, 7, 31, 0, 20),
    ])
    sleeps = []

    async def fake_sleep(delay):
        sleeps.append(delay)
        if len(sleeps) == 3:
            raise StopWorker

    with pytest.raises(StopWorker):
        await worker.plugin_worker(
            ACCOUNTS[:1], {"Recording": RecordingPlugin}, clock=lambda: next(ticks), sleep=fake_sleep
        )

    assert [run[2] for run in RecordingPlugin.runs] == [
        datetime(2024, 1, 1, 7, 30),
        datetime(2024, 1, 1, 7, 31),
    ]
    assert sleeps[0] == pytest.approx(59.0)


def test_weather_today_is_registered():
    from scripts.weather_today import WeatherToday

    assert worker.BATCH_PLUGINS["PluginsBatchWeatherToday"] is WeatherToday


async def test_plugin_worker_catches_up_skipped_minutes():
    RecordingPlugin.runs = []
    ticks = iter([
        datetime(2024, 1, 1, 7, 30, 0),
        datetime(2024, 1, 1, 7, 32, 5),  # проход за 07:30 занял больше минуты
        datetime(2024, 1, 1, 7, 32, 5),
        datetime(2024, 1, 1, 7, 32, 6),
    ])
    sleeps = []

    async def fake_sleep(delay):
        sleeps.append(delay)
        if len(sleeps) == 2:
            raise StopWorker

    with pytest.raises(StopWorker):
        await worker.plugin_worker(
            ACCOUNTS[:1], {"Recording": RecordingPlugin}, clock=lambda: next(ticks), sleep=fake_sleep
        )

    assert [run[2] for run in RecordingPlugin.runs] == [
        datetime(2024, 1, 1, 7, 30),
        datetime(2024, 1, 1, 7, 31),
        datetime(2024, 1, 1, 7, 32),
    ]
    assert sleeps[0] == 0.5
    print("✅ test_plugin_worker_catches_up_skipped_minutes passed")


def test_due_minutes_clock_moved_back():
    now = datetime(2024, 1, 1, 7, 0)

    assert worker._due_minutes(None, now) == [now]
    assert worker._due_minutes(datetime(2024, 1, 1, 8, 0), now) == [now]
    assert worker._due_minutes(now, now) == []


def test_due_minutes_catch_up_is_limited():
    last_run = datetime(2024, 1, 1, 0, 0)
    now = datetime(2024, 1, 1, 5, 0)

    due = worker._due_minutes(last_run, now)

    assert len(due) == worker.MAX_CATCH_UP // timedelta(minutes=1)
    assert due[0] == datetime(2024, 1, 1, 4, 1)
    assert due[-1] == now
