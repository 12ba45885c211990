import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    bot_token: str
    database_url: str
    log_level: str
    log_path: str
    session_key: str
    copied_indicator_seconds: float
    rate_limit_calls: int
    rate_limit_period: int


def _read_number(name: str, default: str, cast):
    raw = os.getenv(name, default)
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}.") from exc


def load_settings() -> Settings:
    bot_token = os.getenv("BOT_TOKEN")
    database_url = os.getenv("DATABASE_URL")
    log_level = os.getenv("LOG_LEVEL", "INFO")
    log_path = os.getenv("LOG_PATH", "logs/giftdraw.log")
    session_key = os.getenv("SESSION_KEY", "secret-draw").strip()

    if not bot_token:
        raise ValueError("BOT_TOKEN is required. Set it in the environment or .env file.")
    if not database_url:
        raise ValueError("DATABASE_URL is required. Set it in the environment or .env file.")
    if not session_key:
        raise ValueError("SESSION_KEY must not be empty.")

    return Settings(
        bot_token=bot_token,
        database_url=database_url,
        log_level=log_level,
        log_path=log_path,
        session_key=session_key,
        copied_indicator_seconds=_read_number("COPIED_INDICATOR_SECONDS", "2", float),
        rate_limit_calls=_read_number("RATE_LIMIT_CALLS", "5", int),
        rate_limit_period=_read_number("RATE_LIMIT_PERIOD", "10", int),
    )
