"""
Runtime configuration, read from the environment and an optional .env file.
"""
import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from core.scroll import FOLLOW_DISTANCE, RELEASE_DISTANCE

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f'{name} must be a number, got {raw!r}') from None


@dataclass(frozen=True)
class Settings:
    api_url: str = 'http://localhost:8000'
    chat_path: str = '/api/chat'
    api_key: str = ''
    connect_timeout: float = 10.0
    follow_distance: float = FOLLOW_DISTANCE
    release_distance: float = RELEASE_DISTANCE
    log_level: str = 'INFO'
    log_file: str = 'chat.log'

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            api_url=os.getenv('API_URL', cls.api_url).rstrip('/'),
            chat_path=os.getenv('CHAT_PATH', cls.chat_path),
            api_key=os.getenv('API_KEY', cls.api_key).strip(),
            connect_timeout=_float_env('CONNECT_TIMEOUT', cls.connect_timeout),
            follow_distance=_float_env('SCROLL_FOLLOW_DISTANCE', cls.follow_distance),
            release_distance=_float_env('SCROLL_RELEASE_DISTANCE', cls.release_distance),
            log_level=os.getenv('LOG_LEVEL', cls.log_level).upper(),
            log_file=os.getenv('LOG_FILE', cls.log_file),
        )


def configure_logging(settings: Settings) -> None:
    # the TUI owns the terminal, so logs go to a file
    logging.basicConfig(
        level=settings.log_level,
        format=LOG_FORMAT,
        filename=settings.log_file,
    )
