# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Device records and the read-time projections derived from them."""

from __future__ import annotations

from dataclasses import dataclass, fields
from datetime import datetime
from enum import StrEnum


class DeviceStatus(StrEnum):
    NORMAL = "normal"
    EXPIRING = "expiring"
    EXPIRED = "expired"


def compose_location(building: str, room: str) -> str:
    return f"{building}-{room}"


@dataclass(slots=True, frozen=True)
class Device:
    """A stored device. ``status`` is never persisted; services attach it on read."""

    id: int
    name: str
    expiry_date: str
    building: str
    room: str
    location: str
    created_at: datetime
    updated_at: datetime
    status: DeviceStatus | None = None


@dataclass(slots=True, frozen=True)
class DevicePatch:
    """Partial device update. ``None`` and empty strings mean "not supplied"."""

    name: str | None = None
    expiry_date: str | None = None
    building: str | None = None
    room: str | None = None

    def supplied(self) -> dict[str, str]:
        return {
            f.name: value
            for f in fields(self)
            if (value := getattr(self, f.name))
        }

    def changes_for(self, current: Device) -> dict[str, str]:
        """Return the column values to write, with ``location`` recomputed
        from the merged building/room when either of them is supplied."""

        changes = self.supplied()
        if "building" in changes or "room" in changes:
            changes["location"] = compose_location(
                changes.get("building", current.building),
                changes.get("room", current.room),
            )
        return changes

    def is_empty(self) -> bool:
        return not self.supplied()


@dataclass(slots=True, frozen=True)
class DeviceStats:
    total: int = 0
    normal: int = 0
    expiring: int = 0
    expired: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "normal": self.normal,
            "expiring": self.expiring,
            "expired": self.expired,
        }
