# -*- coding: utf-8 -*-
"""
Воркер пакетных плагинов.

Раз в минуту для каждого аккаунта и каждого зарегистрированного плагина
спрашивает is_valid(account, now) и, если пора, запускает run().
"""

import asyncio
import logging
from datetime import datetime, timedelta
from typing import Awaitable, Callable, Dict, List, Optional

from config.bot_config import AccountData
from scripts.weather_today import WeatherToday

logger = logging.getLogger("plugin_worker")

# Дольше пропущенные минуты не догоняем (например, после сна хоста)
MAX_CATCH_UP = timedelta(hours=1)

BATCH_PLUGINS: Dict[str, type] = {
    "PluginsBatchWeatherToday": WeatherToday,
}


def _truncate_to_minute(moment: datetime) -> datetime:
    return moment.replace(second=0, microsecond=0)


def _due_minutes(last_run: Optional[datetime], now: datetime) -> List[datetime]:
    """
    Минуты, которые нужно отработать: все с last_run (не включая) по now.

    Если предыдущий проход затянулся, пропущенные минуты догоняются по
    порядку, но не больше MAX_CATCH_UP. Если часы ушли назад, отрабатывается
    только now.
    """
    if last_run is None or now < last_run:
        return [now]

    first = last_run + timedelta(minutes=1)
    if now - first >= MAX_CATCH_UP:
        logger.warning(f"⚠️ Пропущено больше {MAX_CATCH_UP} — догоняем только последние минуты")
        first = now - MAX_CATCH_UP + timedelta(minutes=1)

    due = []
    minute = first
    while minute <= now:
        due.append(minute)
        minute += timedelta(minutes=1)
    return due


async def run_batch_plugins(
    accounts: List[AccountData],
    plugins: Dict[str, type],
    now: datetime,
) -> List[bool]:
    """
    Запускает все плагины, которым пора работать в момент now.

    Returns:
        list[bool]: результаты запущенных плагинов (в порядке запуска)
    """
    results = []
    for account in accounts:
        for full_name, plugin in plugins.items():
            try:
                if not plugin.is_valid(account, now):
                    continue

                def finish(is_processed: bool, full_name=full_name, account=account):
                    icon = "✅" if is_processed else "❌"
                    logger.info(f"{icon} {full_name} завершён для {account.user_id}: {is_processed}")

                logger.info(f"🚀 Запуск {full_name} для аккаунта {account.user_id} ({now:%H:%M})")
                results.append(await plugin(account, now, full_name).run(finish))
            except Exception as e:
                logger.error(f"💥 Плагин {full_name} упал для {account.user_id}: {e}", exc_info=True)
                results.append(False)
    return results


async def plugin_worker(
    accounts: List[AccountData],
    plugins: Optional[Dict[str, type]] = None,
    clock: Callable[[], datetime] = datetime.now,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
):
    """
    Бесконечный цикл, выровненный по началу минуты.

    Каждая минута отрабатывается ровно один раз, даже если предыдущий
    проход занял больше минуты.
    """
    plugins = BATCH_PLUGINS if plugins is None else plugins
    logger.info(f"🔌 Plugin worker запущен: аккаунтов={len(accounts)}, плагинов={len(plugins)}")

    last_run: Optional[datetime] = None
    while True:
        now = _truncate_to_minute(clock())
        for minute in _due_minutes(last_run, now):
            await run_batch_plugins(accounts, plugins, minute)
            last_run = minute

        # === ЖДЁМ СЛЕДУЮЩУЮ МИНУТУ ===
        next_minute = now + timedelta(minutes=1)
        delay = max((next_minute - clock()).total_seconds(), 0.5)
        await sleep(delay)
