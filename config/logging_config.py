# config/logging_config.py
import logging
import logging.handlers
from pathlib import Path

LOGS_DIR = Path(__file__).parent.parent / "logs"
LOG_FILE_NAME = "app.log"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-15s | %(funcName)-20s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Имена наших обработчиков на root-логгере
FILE_HANDLER_NAME = "weather_today_file"
CONSOLE_HANDLER_NAME = "weather_today_console"

QUIET_LOGGERS = ("httpx", "telegram", "urllib3")


def _replace_handler(root: logging.Logger, handler: logging.Handler, name: str):
    for old in [h for h in root.handlers if h.get_name() == name]:
        root.removeHandler(old)
        old.close()
    handler.set_name(name)
    root.addHandler(handler)


def setup_logging(log_level: str = "INFO", log_dir: Path = None) -> Path:
    """
    Настраивает глобальное логирование с ротацией.

    Повторный вызов заменяет ранее установленные обработчики, а не добавляет
    новые. Возвращает путь к файлу лога.
    """
    log_dir = Path(log_dir) if log_dir else LOGS_DIR
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Файл (ротация 10 МБ, 5 файлов)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    _replace_handler(root, file_handler, FILE_HANDLER_NAME)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)
    _replace_handler(root, console_handler, CONSOLE_HANDLER_NAME)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(f"🔧 Логирование инициализировано: {log_file}")
    return log_file
