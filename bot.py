# bot.py
# -*- coding: utf-8 -*-
"""
Точка входа: запускает воркер пакетных плагинов (погода на сегодня и др.).
"""
import asyncio
import logging

from process_manager import process_manager
from workers.plugin_worker import BATCH_PLUGINS, plugin_worker


def main():
    process_manager.initialize_sync()
    logging.info("🚀 Запуск бота")
    config = process_manager.config

    if not config.telegram_token and not any(a.token for a in config.accounts):
        logging.critical("❌ TELEGRAM_BOT_TOKEN не задан")
        raise ValueError("TELEGRAM_BOT_TOKEN не задан в .env!")
    if not config.accounts:
        logging.warning("⚠️ ACCOUNT_IDS пуст — публиковать некуда")

    try:
        asyncio.run(plugin_worker(config.accounts, BATCH_PLUGINS))
    except KeyboardInterrupt:
        logging.info("🛑 Остановка по запросу пользователя.")
    finally:
        process_manager.shutdown_sync()


if __name__ == "__main__":
    main()
