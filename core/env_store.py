# -*- coding: utf-8 -*-
"""
Хранилище настроек плагинов.

Настройки лежат в переменных окружения (или в .env) с префиксом
полного имени плагина: `<PLUGIN_FULL_NAME>_<KEY>`, например
`PLUGINSBATCHWEATHERTODAY_SCHEDULES_1001`.
"""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger("env_store")

load_dotenv()


def env_key(plugin_full_name: str, key: str) -> str:
    return f"{plugin_full_name}_{key}".upper()


def get_env_data(plugin_full_name: str, key: str) -> str:
    """Возвращает значение настройки плагина или пустую строку."""
    name = env_key(plugin_full_name, key)
    value = os.getenv(name, "")
    if not value:
        logger.debug(f"🔍 Настройка {name} не задана")
    return value
