"""
Logging redaction helpers.
Redacts wallet secret keys and credentials from log messages.
"""

from __future__ import annotations

import logging
import re
import threading
from typing import Iterable, Set


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._]+)"), r"\1[REDACTED]"),
    # secret / private key key-value pairs
    (re.compile(r"(?i)(secret[_-]?key|private[_-]?key|secret)\s*[:=]\s*([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
    # API keys embedded in RPC URLs (?api-key=...)
    (re.compile(r"(?i)(api[_-]?key)=([A-Za-z0-9\-\._]+)"), r"\1=[REDACTED]"),
    # base64 transaction payloads (sendTransaction params)
    (re.compile(r"[A-Za-z0-9+/]{100,}={0,2}"), "[PAYLOAD]"),
)

# Signatures and secret keys share the same base58 shape, so secrets are
# redacted by exact value once they are known.
_known_secrets: Set[str] = set()
_secrets_lock = threading.Lock()


def register_secret(value: str) -> None:
    if not value:
        return
    with _secrets_lock:
        _known_secrets.add(value)


def clear_secrets() -> None:
    with _secrets_lock:
        _known_secrets.clear()


def redact_message(message: str) -> str:
    redacted = message
    with _secrets_lock:
        secrets = list(_known_secrets)
    for secret in secrets:
        if secret in redacted:
            redacted = redacted.replace(secret, "[REDACTED]")
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
        except (TypeError, ValueError):
            # Malformed format args; let logging report it unchanged
            return True
        record.msg = redact_message(message)
        record.args = ()
        return True


def install_redaction_filter() -> None:
    # Handler filters see records propagated from child loggers; logger
    # filters on the root do not.
    for handler in logging.getLogger().handlers:
        if any(isinstance(existing, RedactingFilter) for existing in handler.filters):
            continue
        handler.addFilter(RedactingFilter())
