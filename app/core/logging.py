import logging
import os
import re
from typing import Optional


DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
DEFAULT_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | session=%(session_id)s "
    "provider=%(provider)s | %(message)s"
)

# Transport loggers echo full request URLs, which carry the Gemini key
NOISY_LOGGERS = ("httpx", "httpcore")

_SECRET_PATTERNS = (
    re.compile(r"(key=)[^&\s'\"]+"),
    re.compile(r"(Bearer\s+)[^\s'\"]+"),
)


def redact(text: str) -> str:
    for pattern in _SECRET_PATTERNS:
        text = pattern.sub(r"\1***", text)
    return text


class ContextFilter(logging.Filter):
    """Fills ``session_id``/``provider`` with "-" when a record lacks them."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "session_id"):
            record.session_id = "-"
        if not hasattr(record, "provider"):
            record.provider = "-"
        return True


class RedactingFormatter(logging.Formatter):
    """Masks API keys in the rendered line, including exception text."""

    def format(self, record: logging.LogRecord) -> str:
        return redact(super().format(record))


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure the root handler; safe to call again on reload."""
    resolved_level = getattr(logging, (level or DEFAULT_LEVEL).upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(resolved_level)
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(RedactingFormatter(fmt or DEFAULT_FORMAT))
    handler.addFilter(ContextFilter())
    root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(resolved_level, logging.WARNING))


def get_logger(name: str) -> logging.Logger:
    if not logging.getLogger().handlers:
        setup_logging()
    return logging.getLogger(name)
