# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from devicetracker.application.services.auth_service import AuthService
from devicetracker.application.services.device_service import DeviceService
from devicetracker.application.services.password_hashing import WerkzeugPasswordHasher
from devicetracker.application.services.session_manager import SessionManager
from devicetracker.infrastructure.db import build_engine, build_session_factory, init_db
from devicetracker.infrastructure.repositories.devices.sqlalchemy_device_repository import (
    SqlAlchemyDeviceRepository,
)
from devicetracker.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemySessionTokenRepository,
    SqlAlchemyUserRepository,
)
from devicetracker.interfaces.http.auth import SessionCookie
from devicetracker.interfaces.http.controllers.auth_controller import AuthController
from devicetracker.interfaces.http.controllers.devices_controller import DevicesController
from devicetracker.shared.config import AppConfig


class Container:
    """Builds the store client once and hands it to every service by reference."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def engine(self) -> Engine:
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> sessionmaker[Session]:
        return build_session_factory(self.engine)

    def init_db(self) -> None:
        init_db(self.engine)

    # Repositories

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def session_token_repository(self) -> SqlAlchemySessionTokenRepository:
        return SqlAlchemySessionTokenRepository(self.session_factory)

    @cached_property
    def device_repository(self) -> SqlAlchemyDeviceRepository:
        return SqlAlchemyDeviceRepository(self.session_factory)

    # Services

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def session_manager(self) -> SessionManager:
        return SessionManager(
            users=self.user_repository,
            sessions=self.session_token_repository,
            ttl=timedelta(days=self.config.security.session_ttl_days),
        )

    @cached_property
    def auth_service(self) -> AuthService:
        return AuthService(
            users=self.user_repository,
            sessions=self.session_manager,
            password_hasher=self.password_hasher,
            invite_code=self.config.invite_code,
        )

    @cached_property
    def device_service(self) -> DeviceService:
        return DeviceService(devices=self.device_repository)

    # HTTP

    @cached_property
    def session_cookie(self) -> SessionCookie:
        security = self.config.security
        return SessionCookie(
            name=security.cookie_name,
            max_age=self.session_manager.max_age_seconds,
            secure=security.cookie_secure,
            samesite=security.cookie_samesite,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            auth_service=self.auth_service,
            session_manager=self.session_manager,
            cookie=self.session_cookie,
        )

    @cached_property
    def devices_controller(self) -> DevicesController:
        return DevicesController(
            device_service=self.device_service,
            session_manager=self.session_manager,
            cookie=self.session_cookie,
        )
