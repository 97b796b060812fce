"""Telegram Bot API delivery."""

from typing import Optional

import aiohttp

from hwm_worker.config.logger import logger as root_logger
from hwm_worker.config.settings import TELEGRAM_API_URL, Settings
from ..formatter import ChannelFormat, MessageFormatter
from ..notification import Notification
from .base import NotificationProvider


class TelegramProvider(NotificationProvider):
    """Send notifications to a Telegram chat through a bot.

    The provider is enabled only when both the bot token and the chat id are
    set to non-empty values.
    """

    name = "Telegram"
    parse_mode = "Markdown"

    def __init__(
        self,
        bot_token: Optional[str],
        chat_id: Optional[str],
        api_url: str = TELEGRAM_API_URL,
        session: Optional[aiohttp.ClientSession] = None,
        logger=None,
    ):
        self.bot_token = bot_token
        self.chat_id = chat_id
        self.api_url = api_url.rstrip("/")
        self._session = session
        self.logger = logger or root_logger.bind(provider=self.name)

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "TelegramProvider":
        return cls(
            settings.telegram_bot_token,
            settings.telegram_chat_id,
            api_url=settings.telegram_api_url,
            **kwargs,
        )

    def enabled(self) -> bool:
        return str(self.bot_token or "") != "" and str(self.chat_id or "") != ""

    @property
    def send_message_url(self) -> str:
        return f"{self.api_url}/bot{self.bot_token}/sendMessage"

    def build_payload(self, notification: Notification) -> dict:
        return {
            "chat_id": self.chat_id,
            "text": MessageFormatter.render(notification, ChannelFormat.TELEGRAM),
            "parse_mode": self.parse_mode,
        }

    async def deliver(self, notification: Notification) -> None:
        """Post the rendered notification to ``sendMessage``.

        Raises:
            aiohttp.ClientResponseError: Telegram answered with a non-2xx status.
            aiohttp.ClientError: The API could not be reached.
        """
        payload = self.build_payload(notification)

        if self._session is not None and not self._session.closed:
            await self._post(self._session, payload)
            return

        async with aiohttp.ClientSession() as session:
            await self._post(session, payload)

    async def _post(self, session: aiohttp.ClientSession, payload: dict) -> None:
        async with session.post(self.send_message_url, json=payload) as resp:
            resp.raise_for_status()
        self.logger.info("telegram_message_sent", chat_id=self.chat_id)
