"""Render notifications into channel specific text."""

import re
from datetime import timezone
from enum import Enum
from typing import Optional, Union

from .exceptions import UnsupportedFormat
from .notification import Notification, Severity

LEVEL_GLYPHS = {
    Severity.CRITICAL: "\U0001F534",  # red circle
    Severity.ERROR: "\U0001F7E0",     # orange circle
    Severity.WARNING: "\U0001F7E1",   # yellow circle
}

# Telegram legacy Markdown specials; already escaped characters are skipped
_MARKDOWN_SPECIALS = re.compile(r"(?<!\\)([_*`\[\]])")


class ChannelFormat(Enum):
    TELEGRAM = "telegram"


def escape_markdown(text: Optional[str]) -> Optional[str]:
    """Backslash-escape Telegram Markdown characters in user supplied text."""
    if text is None:
        return None
    return _MARKDOWN_SPECIALS.sub(r"\\\1", str(text))


class MessageFormatter:
    """Turn a Notification into the text payload of one delivery channel."""

    @classmethod
    def render(cls, notification: Notification, channel_format: Union[ChannelFormat, str]) -> str:
        """Render ``notification`` for ``channel_format``.

        Raises:
            UnsupportedFormat: The format is not known.
        """
        fmt = cls._parse_format(channel_format)
        if fmt is ChannelFormat.TELEGRAM:
            return cls._render_telegram(notification)
        raise UnsupportedFormat(f"Unknown format: {channel_format}")

    @staticmethod
    def _parse_format(channel_format: Union[ChannelFormat, str]) -> ChannelFormat:
        if isinstance(channel_format, ChannelFormat):
            return channel_format
        try:
            return ChannelFormat(str(channel_format).lower())
        except ValueError:
            raise UnsupportedFormat(f"Unknown format: {channel_format}") from None

    @staticmethod
    def header_line(notification: Notification) -> str:
        glyph = LEVEL_GLYPHS[notification.level]
        level_text = notification.level.value.upper()
        return f"{glyph} {level_text}: {escape_markdown(notification.title)}"

    @staticmethod
    def format_time(notification: Notification) -> str:
        return notification.occurred_at.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")

    @classmethod
    def _render_telegram(cls, notification: Notification) -> str:
        lines = [
            cls.header_line(notification),
            "",
            f"*Source:* {escape_markdown(notification.source)}",
        ]
        if notification.worker_name:
            lines.append(f"*Worker:* {escape_markdown(notification.worker_name)}")
        if notification.actor_id:
            lines.append(f"*User:* {escape_markdown(notification.actor_id)}")
        lines.append(f"*Time:* {cls.format_time(notification)}")
        lines.extend(["", "*Message:*", escape_markdown(notification.message)])

        if notification.stack_trace:
            lines.extend(["", "*Stack trace:*", "```"])
            lines.extend(escape_markdown(frame) for frame in notification.stack_trace)
            lines.append("```")

        return "\n".join(lines)
