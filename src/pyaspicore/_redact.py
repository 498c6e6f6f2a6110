"""Helpers for safe debug logging.

Identifier tokens are hardware IMEIs, and raw sentences can be arbitrarily
long garbage when a device misbehaves. These utilities keep DEBUG logs
useful without dumping either verbatim.
"""

from __future__ import annotations

import re

_IDENTIFIER_RE = re.compile(r"\d{8,}")


def mask_identifier(identifier: str, *, keep: int = 4) -> str:
    """Return *identifier* with everything except the last *keep* characters masked."""
    if len(identifier) <= keep:
        return "*" * len(identifier)
    return "*" * (len(identifier) - keep) + identifier[-keep:]


def redact_for_log(sentence: str, *, max_string: int = 128) -> str:
    """Return a copy of *sentence* suitable for debug logs.

    Long digit runs (identifier tokens) are masked, and the result is
    truncated to *max_string* characters.
    """
    redacted = _IDENTIFIER_RE.sub(lambda m: mask_identifier(m.group(0)), sentence)
    if len(redacted) > max_string:
        return f"{redacted[:max_string]}…<truncated>"
    return redacted
