# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from time import perf_counter

from flask import Blueprint, Response, jsonify

from devicetracker.application.services.device_service import DeviceService
from devicetracker.application.services.session_manager import SessionManager
from devicetracker.interfaces.http.auth import SessionCookie, current_user_id, session_required
from devicetracker.interfaces.http.dto.devices import (
    CreateDeviceRequestDTO,
    DeviceDTO,
    DeviceListQueryDTO,
    UpdateDeviceRequestDTO,
)
from devicetracker.interfaces.http.validation import parse_body, parse_query
from devicetracker.shared.logging import logger


class DevicesController:
    def __init__(
        self,
        *,
        device_service: DeviceService,
        session_manager: SessionManager,
        cookie: SessionCookie,
    ) -> None:
        self._devices = device_service
        self._sessions = session_manager
        self._cookie = cookie

    def list_devices(self) -> Response:
        t0 = perf_counter()
        query = parse_query(DeviceListQueryDTO)
        items = [
            DeviceDTO.from_entity(device).to_json()
            for device in self._devices.list_devices(status=query.status, search=query.search)
        ]
        dt = (perf_counter() - t0) * 1000
        logger.info(
            f"devices.list: ok (user_id={current_user_id()}, n={len(items)}, "
            f"status={query.status or '-'}, dt_ms={dt:.0f})"
        )
        return jsonify({"items": items})

    def create(self) -> tuple[Response, int]:
        dto = parse_body(CreateDeviceRequestDTO)
        device = self._devices.create(dto.name, dto.expiry_date, dto.building, dto.room)
        logger.info(f"device.create: by user_id={current_user_id()} device_id={device.id}")
        return jsonify(DeviceDTO.from_entity(device).to_json()), 201

    def get(self, device_id: int) -> Response:
        device = self._devices.get_by_id(device_id)
        return jsonify(DeviceDTO.from_entity(device).to_json())

    def update(self, device_id: int) -> Response:
        dto = parse_body(UpdateDeviceRequestDTO)
        device = self._devices.update(device_id, dto.to_patch())
        return jsonify(DeviceDTO.from_entity(device).to_json())

    def delete(self, device_id: int) -> Response:
        self._devices.delete(device_id)
        logger.info(f"device.delete: by user_id={current_user_id()} device_id={device_id}")
        return jsonify({"ok": True})

    def stats(self) -> Response:
        return jsonify(self._devices.stats().as_dict())

    def as_blueprint(self) -> Blueprint:
        guard = session_required(self._sessions, self._cookie)
        bp = Blueprint("devices", __name__, url_prefix="/api/devices")
        bp.add_url_rule("", view_func=guard(self.list_devices), methods=["GET"])
        bp.add_url_rule("", view_func=guard(self.create), methods=["POST"])
        bp.add_url_rule("/stats", view_func=guard(self.stats), methods=["GET"])
        bp.add_url_rule("/<int:device_id>", view_func=guard(self.get), methods=["GET"])
        bp.add_url_rule("/<int:device_id>", view_func=guard(self.update), methods=["PATCH"])
        bp.add_url_rule("/<int:device_id>", view_func=guard(self.delete), methods=["DELETE"])
        return bp
