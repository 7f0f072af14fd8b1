# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterator
from dataclasses import replace
from datetime import date

from devicetracker.domain.devices.entities import Device, DevicePatch, DeviceStats, DeviceStatus
from devicetracker.domain.devices.exceptions import DeviceNotFoundError
from devicetracker.domain.devices.repositories import DeviceRepository
from devicetracker.domain.devices.status import calculate_device_status
from devicetracker.shared.errors import require_fields
from devicetracker.shared.logging import logger


def _matches_search(device: Device, needle: str) -> bool:
    return needle in device.name.lower() or needle in device.location.lower()


class DeviceService:
    def __init__(
        self,
        *,
        devices: DeviceRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._devices = devices
        self._today = today

    def _with_status(self, device: Device, today: date | None = None) -> Device:
        status = calculate_device_status(device.expiry_date, today or self._today())
        return replace(device, status=status)

    def create(self, name: str, expiry_date: str, building: str, room: str) -> Device:
        require_fields(name=name, expiry_date=expiry_date, building=building, room=room)
        device = self._devices.add(
            name=name.strip(),
            expiry_date=expiry_date.strip(),
            building=building.strip(),
            room=room.strip(),
        )
        logger.info(f"device.create: ok (device_id={device.id}, location={device.location})")
        return self._with_status(device)

    def list_devices(
        self,
        status: DeviceStatus | str | None = None,
        search: str | None = None,
    ) -> Iterator[Device]:
        rows = self._devices.list_recent_first()
        today = self._today()
        needle = search.strip().lower() if search else ""

        def _iter() -> Iterator[Device]:
            for row in rows:
                device = self._with_status(row, today)
                if status and device.status != status:
                    continue
                if needle and not _matches_search(device, needle):
                    continue
                yield device

        return _iter()

    def get_by_id(self, device_id: int) -> Device:
        device = self._devices.get(device_id)
        if device is None:
            raise DeviceNotFoundError(device_id)
        return self._with_status(device)

    def update(self, device_id: int, patch: DevicePatch) -> Device:
        device = self._devices.apply_patch(device_id, patch)
        if device is None:
            logger.info(f"device.update: not_found (device_id={device_id})")
            raise DeviceNotFoundError(device_id)
        logger.info(
            f"device.update: ok (device_id={device_id}, fields={sorted(patch.supplied())})"
        )
        return self._with_status(device)

    def delete(self, device_id: int) -> None:
        if not self._devices.delete(device_id):
            logger.info(f"device.delete: not_found (device_id={device_id})")
            raise DeviceNotFoundError(device_id)
        logger.info(f"device.delete: ok (device_id={device_id})")

    def stats(self) -> DeviceStats:
        counts = Counter(device.status for device in self.list_devices())
        return DeviceStats(
            total=sum(counts.values()),
            normal=counts[DeviceStatus.NORMAL],
            expiring=counts[DeviceStatus.EXPIRING],
            expired=counts[DeviceStatus.EXPIRED],
        )
