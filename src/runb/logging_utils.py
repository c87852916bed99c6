"""Logging utilities with secret redaction.

Provides:
- Redaction of known secret values and Authorization/Bearer header values
- A logging filter that applies redaction to every record
- CLI logging setup
"""

import logging
import os
import re
from collections.abc import Iterable

REDACTED = "***REDACTED***"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Pattern for Authorization header values
AUTH_HEADER_PATTERN = re.compile(
    r"(Authorization[:\s]+)((?:Basic|Bearer)\s+)?([^\s,;]+)",
    re.IGNORECASE,
)

BEARER_PATTERN = re.compile(r"(Bearer\s+)([A-Za-z0-9\-._~+/]+=*)")


def redact_secrets(text: str | None, values: Iterable[str] = ()) -> str:
    """Redact secrets from text.

    Args:
        text: Text that may contain secrets
        values: Known secret values to mask wherever they appear

    Returns:
        Text with secrets redacted
    """
    if text is None:
        return ""

    if not isinstance(text, str):
        text = str(text)

    # Longest first so a value containing another is masked whole
    for value in sorted({v for v in values if v}, key=len, reverse=True):
        text = text.replace(value, REDACTED)

    text = AUTH_HEADER_PATTERN.sub(rf"\1\2{REDACTED}", text)
    text = BEARER_PATTERN.sub(rf"\1{REDACTED}", text)

    return text


class SecretRedactingFilter(logging.Filter):
    """Mask registered secret values in log records."""

    def __init__(self, values: Iterable[str] = ()):
        super().__init__()
        self._values: set[str] = {v for v in values if v}

    def add_values(self, values: Iterable[str]) -> None:
        self._values.update(v for v in values if v)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = redact_secrets(message, self._values)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _level_from_env() -> int:
    """LOG_LEVEL as a level number, WARNING when unset or unknown."""
    level = logging.getLevelName(os.environ.get("LOG_LEVEL", "WARNING").strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(verbose: bool = False) -> SecretRedactingFilter:
    """Configure root logging for the CLI.

    Verbose mode logs at DEBUG. Otherwise the level comes from LOG_LEVEL,
    defaulting to WARNING so pipeline output stays quiet.

    Returns:
        The redacting filter attached to the root handlers, so callers can
        register secret values once they are known.
    """
    level = logging.DEBUG if verbose else _level_from_env()
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)

    redacting_filter = SecretRedactingFilter()
    for handler in logging.getLogger().handlers:
        handler.addFilter(redacting_filter)
    return redacting_filter
