# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from devicetracker.shared.errors.base import NotFoundError


class DeviceNotFoundError(NotFoundError):
    default_code = "device_not_found"

    def __init__(self, device_id: int) -> None:
        super().__init__({"device_id": device_id})
