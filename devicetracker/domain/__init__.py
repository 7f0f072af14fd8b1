# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .devices import Device, DevicePatch, DeviceStats, DeviceStatus, calculate_device_status
from .users import SessionToken, User

__all__ = [
    "Device",
    "DevicePatch",
    "DeviceStats",
    "DeviceStatus",
    "SessionToken",
    "User",
    "calculate_device_status",
]
