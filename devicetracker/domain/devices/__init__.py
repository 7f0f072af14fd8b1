# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Device, DevicePatch, DeviceStats, DeviceStatus, compose_location
from .exceptions import DeviceNotFoundError
from .repositories import DeviceRepository
from .status import EXPIRING_WINDOW_DAYS, calculate_device_status, parse_expiry_date

__all__ = [
    "EXPIRING_WINDOW_DAYS",
    "Device",
    "DeviceNotFoundError",
    "DevicePatch",
    "DeviceRepository",
    "DeviceStats",
    "DeviceStatus",
    "calculate_device_status",
    "compose_location",
    "parse_expiry_date",
]
