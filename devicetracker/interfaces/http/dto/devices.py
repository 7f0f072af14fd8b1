# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from devicetracker.domain.devices.entities import Device, DevicePatch, DeviceStatus
from devicetracker.domain.devices.status import parse_expiry_date

_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"


def _calendar_date(value: str | None) -> str | None:
    if value is not None and parse_expiry_date(value) is None:
        raise ValueError("not a calendar date")
    return value


class CreateDeviceRequestDTO(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    expiry_date: str = Field(pattern=_DATE_PATTERN, alias="expiryDate")
    building: str = Field(min_length=1, max_length=128)
    room: str = Field(min_length=1, max_length=128)

    model_config = ConfigDict(validate_by_name=True, str_strip_whitespace=True)

    @field_validator("expiry_date")
    @classmethod
    def _real_date(cls, value: str | None) -> str | None:
        return _calendar_date(value)


class UpdateDeviceRequestDTO(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=256)
    expiry_date: str | None = Field(None, pattern=_DATE_PATTERN, alias="expiryDate")
    building: str | None = Field(None, min_length=1, max_length=128)
    room: str | None = Field(None, min_length=1, max_length=128)

    model_config = ConfigDict(validate_by_name=True, str_strip_whitespace=True)

    @field_validator("expiry_date")
    @classmethod
    def _real_date(cls, value: str | None) -> str | None:
        return _calendar_date(value)

    def to_patch(self) -> DevicePatch:
        return DevicePatch(
            name=self.name,
            expiry_date=self.expiry_date,
            building=self.building,
            room=self.room,
        )


class DeviceListQueryDTO(BaseModel):
    status: DeviceStatus | None = None
    search: str | None = Field(None, max_length=256)

    model_config = ConfigDict(str_strip_whitespace=True)


class DeviceDTO(BaseModel):
    id: int
    name: str
    expiry_date: str = Field(serialization_alias="expiryDate")
    building: str
    room: str
    location: str
    status: DeviceStatus
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    @classmethod
    def from_entity(cls, device: Device) -> DeviceDTO:
        return cls(
            id=device.id,
            name=device.name,
            expiry_date=device.expiry_date,
            building=device.building,
            room=device.room,
            location=device.location,
            status=device.status or DeviceStatus.EXPIRED,
            created_at=device.created_at,
            updated_at=device.updated_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
