"""Notification value object.

A Notification captures one classified event: how severe it is, what
happened, where, and when. It is built once per reported failure, handed to
the notifier and then dropped.
"""

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional, Tuple, Union

from hwm_worker.config.settings import DEFAULT_SOURCE
from .exceptions import InvalidLevel

STACK_TRACE_LIMIT = 5
TRUNCATION_MARKER = "... (truncated)"


class Severity(Enum):
    """Alert severity. Only CRITICAL makes the worker stop."""
    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"

    @classmethod
    def parse(cls, value: Union["Severity", str]) -> "Severity":
        """Coerce a level name into a Severity.

        Raises:
            InvalidLevel: The value is not one of the known levels.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        allowed = ", ".join(level.value for level in cls)
        raise InvalidLevel(f"Invalid level: {value}. Must be one of: {allowed}")


def extract_stack_trace(error: Optional[BaseException], limit: int = STACK_TRACE_LIMIT) -> Optional[Tuple[str, ...]]:
    """Return the innermost ``limit`` frames of ``error`` as text lines.

    A marker line is appended when frames were dropped. Errors that were
    never raised carry no traceback and yield ``None``.
    """
    if error is None or error.__traceback__ is None:
        return None

    frames = traceback.extract_tb(error.__traceback__)
    lines = [f"{frame.filename}:{frame.lineno} in {frame.name}" for frame in reversed(frames)]
    if not lines:
        return None

    trace = lines[:limit]
    if len(lines) > limit:
        trace.append(TRUNCATION_MARKER)
    return tuple(trace)


@dataclass(frozen=True)
class Notification:
    """An immutable alert ready to be delivered.

    Attributes:
        level: Severity of the event. Level names are accepted and coerced.
        title: Short headline, usually the error class name.
        message: Human readable description.
        source: Process that raised the alert.
        worker_name: Which worker routine was running, if known.
        actor_id: Account the worker was acting as, if known.
        error: Originating exception, if any.
        occurred_at: When the event happened.
        stack_trace: Derived from ``error``. ``None`` when there is no traceback.
    """
    level: Severity
    title: str
    message: str
    source: str = DEFAULT_SOURCE
    worker_name: Optional[str] = None
    actor_id: Optional[str] = None
    error: Optional[BaseException] = field(default=None, compare=False)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    stack_trace: Optional[Tuple[str, ...]] = field(init=False, default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "level", Severity.parse(self.level))
        if self.occurred_at is None:
            object.__setattr__(self, "occurred_at", datetime.now(timezone.utc))
        object.__setattr__(self, "stack_trace", extract_stack_trace(self.error))

    @property
    def is_critical(self) -> bool:
        return self.level is Severity.CRITICAL

    @property
    def is_error(self) -> bool:
        return self.level is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.level is Severity.WARNING
