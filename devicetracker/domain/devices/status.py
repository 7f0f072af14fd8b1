# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Expiry status derivation.

The expiry date is a plain calendar date. It is built from its numeric
``YYYY-MM-DD`` components, never through a generic date parser, so the same
literal always maps to the same status regardless of the host timezone.
Anything that is not such a date counts as already expired.
"""

from __future__ import annotations

import re
from datetime import date, datetime

from .entities import DeviceStatus

EXPIRING_WINDOW_DAYS = 7

_YMD = re.compile(r"(\d{4})-(\d{2})-(\d{2})", re.ASCII)


def parse_expiry_date(value: str | date | None) -> date | None:
    if isinstance(value, datetime):
        return None
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    match = _YMD.fullmatch(value)
    if not match:
        return None
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _day_of(now: date | datetime) -> date:
    if isinstance(now, datetime):
        return now.date()
    return now


def calculate_device_status(
    expiry_date: str | date | None, now: date | datetime
) -> DeviceStatus:
    expiry = parse_expiry_date(expiry_date)
    if expiry is None:
        return DeviceStatus.EXPIRED

    diff_days = (expiry - _day_of(now)).days
    if diff_days < 0:
        return DeviceStatus.EXPIRED
    if diff_days <= EXPIRING_WINDOW_DAYS:
        return DeviceStatus.EXPIRING
    return DeviceStatus.NORMAL


__all__ = ["EXPIRING_WINDOW_DAYS", "calculate_device_status", "parse_expiry_date"]
