"""Runtime settings for the worker.

Values come from the process environment. A ``.env`` file in the working
directory is loaded first so local runs behave like the container.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_SOURCE = "HWM_WORKER"
RUCAPTCHA_URL = "http://rucaptcha.com"
TELEGRAM_API_URL = "https://api.telegram.org"


@dataclass(frozen=True)
class Settings:
    """Read-only configuration consumed by the captcha and alert components.

    Attributes:
        rucaptcha_api_key: API key for the captcha solving service.
        rucaptcha_url: Base URL of the captcha solving service.
        captcha_first_delay: Seconds to wait between submit and first poll.
        captcha_retry_delay: Seconds to wait before the single retry poll.
        telegram_bot_token: Bot token used in the Telegram API path.
        telegram_chat_id: Destination chat for alerts.
        telegram_api_url: Base URL of the Telegram Bot API.
        notification_source: Value used as ``source`` on every alert.
        propagate_unclassified: Re-raise non-fatal errors after alerting.
    """
    rucaptcha_api_key: str = ""
    rucaptcha_url: str = RUCAPTCHA_URL
    captcha_first_delay: float = 20
    captcha_retry_delay: float = 30
    telegram_bot_token: Optional[str] = None
    telegram_chat_id: Optional[str] = None
    telegram_api_url: str = TELEGRAM_API_URL
    notification_source: str = DEFAULT_SOURCE
    propagate_unclassified: bool = False


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build settings from the environment.

    Args:
        env_file: Optional path to a dotenv file. When omitted, ``.env`` in
            the current directory is used if it exists.

    Returns:
        A populated Settings instance.
    """
    load_dotenv(env_file)

    return Settings(
        rucaptcha_api_key=os.getenv("RUCAPTCHA_API_KEY", ""),
        rucaptcha_url=os.getenv("RUCAPTCHA_URL", RUCAPTCHA_URL),
        captcha_first_delay=_float_env("CAPTCHA_FIRST_DELAY", 20),
        captcha_retry_delay=_float_env("CAPTCHA_RETRY_DELAY", 30),
        telegram_bot_token=os.getenv("TELEGRAM_BOT_TOKEN"),
        telegram_chat_id=os.getenv("TELEGRAM_CHAT_ID"),
        telegram_api_url=os.getenv("TELEGRAM_API_URL", TELEGRAM_API_URL),
        notification_source=os.getenv("NOTIFICATION_SOURCE", DEFAULT_SOURCE),
        propagate_unclassified=os.getenv("APP_ENV", "production").lower() == "development",
    )
