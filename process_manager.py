# process_manager.py
# -*- coding: utf-8 -*-
"""
Глобальный координатор зависимостей.
Инициализирует конфигурацию и логирование один раз и предоставляет к ним доступ.
"""

import logging
from typing import Optional

from config.bot_config import BotConfig
from config.logging_config import setup_logging

logger = logging.getLogger("process_manager")


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(self):
        self._initialized = False
        self.config: Optional[BotConfig] = None

    def initialize_sync(self):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Конфигурация
        self.config = BotConfig.load()

        # 2. Логирование
        setup_logging(self.config.log_level)

        self._initialized = True
        logger.info(f"✅ ProcessManager: initialized (accounts={len(self.config.accounts)})")

    def shutdown_sync(self):
        if not self._initialized:
            return
        self._initialized = False
        logger.info("🛑 ProcessManager: shut down")


# Глобальный экземпляр — точка доступа для всех модулей
process_manager = ProcessManager()
