# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_MASK = "***"

# (pattern, replacement) pairs applied in order to every log message
_REDACTIONS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(bearer\s+)\S{8,}", re.I), rf"\1{_MASK}"),
    (re.compile(r"(sessionToken=)[^;\s]+"), rf"\1{_MASK}"),
    (re.compile(r"((?:password|invite_?code|secret_?key|token)[\"']?\s*[:=]\s*[\"']?)[^\s\"',;]+", re.I), rf"\1{_MASK}"),
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{_MASK}@"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _REDACTIONS:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    record["message"] = sanitize_message(record["message"])
    return True
