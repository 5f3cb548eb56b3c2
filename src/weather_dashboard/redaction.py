"""Helpers for redacting API credentials from logs and error messages."""

from __future__ import annotations

import re
from typing import Any

REDACTED = "[REDACTED]"

_SENSITIVE_KEY_RE = re.compile(
    r"(appid|token|secret|authorization|api[_-]?key)",
    re.IGNORECASE,
)
_QUERY_CREDENTIAL_RE = re.compile(r"(?i)([?&]appid=)[^&#\s]*")
_KEY_VALUE_SECRET_RE = re.compile(
    r"""(?ix)
    \b
    (
      token|
      secret|
      api[_-]?key|
      openweather[_-]api[_-]key
    )
    \s*[:=]\s*
    ([^\s,;&]+)
    """
)


def sanitize_text(text: str) -> str:
    """Redact credentials embedded in plain text, including request URIs."""
    sanitized = _QUERY_CREDENTIAL_RE.sub(r"\1" + REDACTED, text)
    sanitized = _KEY_VALUE_SECRET_RE.sub(lambda m: f"{m.group(1)}={REDACTED}", sanitized)
    return sanitized


def sanitize_for_logging(value: Any) -> Any:
    """Recursively redact sensitive values in nested structures."""
    if isinstance(value, dict):
        sanitized: dict[Any, Any] = {}
        for key, child in value.items():
            if _SENSITIVE_KEY_RE.search(str(key)):
                sanitized[key] = REDACTED
            else:
                sanitized[key] = sanitize_for_logging(child)
        return sanitized
    if isinstance(value, list):
        return [sanitize_for_logging(item) for item in value]
    if isinstance(value, tuple):
        return tuple(sanitize_for_logging(item) for item in value)
    if isinstance(value, str):
        return sanitize_text(value)
    return value
