# config/bot_config.py
# -*- coding: utf-8 -*-
"""
Конфигурация бота: токен, уровень логирования и список аккаунтов.

Аккаунты задаются через переменные окружения (или .env):

    ACCOUNT_IDS=1001,1002
    ACCOUNT_1001_CHAT_ID=@weather_tokyo
    ACCOUNT_1001_SCREEN_NAME=weather_tokyo
    ACCOUNT_1001_TOKEN=...        # необязательно, иначе TELEGRAM_BOT_TOKEN
"""
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class AccountData:
    """Учётные данные аккаунта, от имени которого публикуются посты."""
    user_id: str
    screen_name: str
    chat_id: str
    token: str


def load_accounts(default_token: str = "") -> List[AccountData]:
    """Читает аккаунты из ACCOUNT_IDS и ACCOUNT_<ID>_* переменных."""
    raw_ids = os.getenv("ACCOUNT_IDS", "")
    accounts = []
    for user_id in (part.strip() for part in raw_ids.split(",")):
        if not user_id:
            continue
        prefix = f"ACCOUNT_{user_id}"
        accounts.append(AccountData(
            user_id=user_id,
            screen_name=os.getenv(f"{prefix}_SCREEN_NAME", ""),
            chat_id=os.getenv(f"{prefix}_CHAT_ID", ""),
            token=os.getenv(f"{prefix}_TOKEN", default_token),
        ))
    return accounts


@dataclass
class BotConfig:
    telegram_token: str
    log_level: str = "INFO"
    accounts: List[AccountData] = field(default_factory=list)

    @classmethod
    def load(cls):
        token = os.getenv("TELEGRAM_BOT_TOKEN", "")
        return cls(
            telegram_token=token,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            accounts=load_accounts(default_token=token),
        )
