# -*- coding: utf-8 -*-
"""
Публикация статуса (поста) от имени аккаунта через Telegram.

Использование:

    post = StatusPost(account)
    post.text = "Tokyo forecast ..."
    is_success = await post.post()
"""

import logging
from typing import Callable

from telegram import Bot
from telegram.error import TelegramError

from config.bot_config import AccountData

logger = logging.getLogger("status_poster")


class StatusPost:
    def __init__(self, account: AccountData, bot_factory: Callable[[str], Bot] = Bot):
        self.account = account
        self.text = ""
        self._bot_factory = bot_factory

    async def post(self) -> bool:
        """Отправляет text в канал аккаунта. Возвращает True при успехе."""
        if not self.text:
            logger.warning(f"⚠️ Пустой текст поста для аккаунта {self.account.user_id}")
            return False
        if not self.account.token or not self.account.chat_id:
            logger.error(f"❌ У аккаунта {self.account.user_id} не задан токен или chat_id")
            return False

        try:
            async with self._bot_factory(self.account.token) as bot:
                message = await bot.send_message(chat_id=self.account.chat_id, text=self.text)
        except TelegramError as e:
            logger.error(f"❌ Не удалось опубликовать пост для {self.account.user_id}: {e}", exc_info=True)
            return False

        logger.info(f"📤 Пост опубликован: account={self.account.user_id}, message_id={message.message_id}")
        return True
