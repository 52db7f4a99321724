# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.
"""

import logging
from typing import Optional

logger = logging.getLogger("error_handler")


class ForecastError(Exception):
    """Ошибка получения прогноза от провайдера (сеть, HTTP, формат ответа)."""


def _format_context(context: Optional[dict]) -> str:
    return f" | Контекст: {context}" if context else ""


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (account_id и т.п.)
    """
    logger.error(f"{message}{_format_context(context)} | Ошибка: {exception!r}", exc_info=exception)
