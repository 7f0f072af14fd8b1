# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .entities import Device, DevicePatch


class DeviceRepository(Protocol):
    def add(self, *, name: str, expiry_date: str, building: str, room: str) -> Device: ...

    def get(self, device_id: int) -> Device | None: ...

    def list_recent_first(self) -> Sequence[Device]: ...

    def apply_patch(self, device_id: int, patch: DevicePatch) -> Device | None:
        """Apply ``patch`` against the current stored record in one transaction.

        Returns ``None`` when no device has that id.
        """
        ...

    def delete(self, device_id: int) -> bool: ...
