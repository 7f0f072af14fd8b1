# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from devicetracker.domain.devices.entities import Device as DomainDevice
from devicetracker.domain.devices.entities import DevicePatch, compose_location
from devicetracker.domain.devices.repositories import DeviceRepository
from devicetracker.infrastructure.db.models import Device, as_utc
from devicetracker.infrastructure.unit_of_work import unit_of_work_scope


def _to_domain(row: Device) -> DomainDevice:
    return DomainDevice(
        id=row.id,
        name=row.name,
        expiry_date=row.expiry_date or "",
        building=row.building,
        room=row.room,
        location=row.location,
        created_at=as_utc(row.created_at),
        updated_at=as_utc(row.updated_at),
    )


class SqlAlchemyDeviceRepository(DeviceRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, *, name: str, expiry_date: str, building: str, room: str) -> DomainDevice:
        with unit_of_work_scope(self._session_factory, "devices.add") as session:
            row = Device(
                name=name,
                expiry_date=expiry_date,
                building=building,
                room=room,
                location=compose_location(building, room),
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def get(self, device_id: int) -> DomainDevice | None:
        with unit_of_work_scope(self._session_factory, "devices.get") as session:
            row = session.get(Device, device_id)
            return _to_domain(row) if row else None

    def list_recent_first(self) -> Sequence[DomainDevice]:
        with unit_of_work_scope(self._session_factory, "devices.list") as session:
            rows = session.scalars(
                select(Device).order_by(Device.created_at.desc(), Device.id.desc())
            ).all()
            return [_to_domain(row) for row in rows]

    def apply_patch(self, device_id: int, patch: DevicePatch) -> DomainDevice | None:
        with unit_of_work_scope(self._session_factory, "devices.update") as session:
            # row lock keeps the building/room merge consistent under concurrent updates
            row = session.get(Device, device_id, with_for_update=True)
            if row is None:
                return None
            changes = patch.changes_for(_to_domain(row))
            if not changes:
                return _to_domain(row)
            for column, value in changes.items():
                setattr(row, column, value)
            session.flush()
            session.refresh(row)
            return _to_domain(row)

    def delete(self, device_id: int) -> bool:
        with unit_of_work_scope(self._session_factory, "devices.delete") as session:
            row = session.get(Device, device_id)
            if row is None:
                return False
            session.delete(row)
            return True
