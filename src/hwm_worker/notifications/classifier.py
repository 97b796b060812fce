"""Map failures to alert severities.

Severity decides what the worker does next: CRITICAL stops the process, the
other levels let it continue with the next cycle. "No work available" is an
expected condition and therefore only a WARNING.
"""

from typing import Optional, Sequence, Tuple, Type

from hwm_worker.captcha.exceptions import InsufficientBalance
from hwm_worker.errors import (
    AutomationTargetBroken,
    InvalidCredentials,
    NoAvailableWork,
    TargetNotFound,
    WorkApplicationFailed,
)
from .notification import Severity

ClassificationRule = Tuple[Type[BaseException], Severity]

# Evaluated top to bottom, first match wins
DEFAULT_RULES: Tuple[ClassificationRule, ...] = (
    (InsufficientBalance, Severity.CRITICAL),
    (InvalidCredentials, Severity.ERROR),
    (WorkApplicationFailed, Severity.ERROR),
    (AutomationTargetBroken, Severity.ERROR),
    (TargetNotFound, Severity.ERROR),
    (NoAvailableWork, Severity.WARNING),
)


class ErrorClassifier:
    """Pure lookup from an error's kind to its Severity."""

    def __init__(
        self,
        rules: Optional[Sequence[ClassificationRule]] = None,
        default: Severity = Severity.ERROR,
    ):
        self._rules = tuple(rules) if rules is not None else DEFAULT_RULES
        self.default = default

    @property
    def rules(self) -> Tuple[ClassificationRule, ...]:
        return self._rules

    def classify(self, error: BaseException) -> Severity:
        for error_type, severity in self._rules:
            if isinstance(error, error_type):
                return severity
        return self.default
