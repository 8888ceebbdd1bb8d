"""Logging filters that scrub sensitive content."""

from __future__ import annotations

import logging
import re

_SENSITIVE_PATTERN = re.compile(
    r"(Authorization: Bearer\s+[\w\.-]+"
    r"|[?&]key=[\w-]+"
    r"|x-goog-api-key[\"']?\s*[:=]\s*[\"']?[\w-]+"
    r"|(?:postgres(?:ql)?|mysql)(?:\+\w+)?://[^:/\s]+:[^@\s]+@)",
    re.IGNORECASE,
)


class SensitiveFilter(logging.Filter):
    """Replace API keys and credentials in log messages with a redaction marker."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = _SENSITIVE_PATTERN.sub("**REDACTED**", record.msg)
        return True


__all__ = ["SensitiveFilter"]
