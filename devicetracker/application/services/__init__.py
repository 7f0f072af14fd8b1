# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .auth_service import AuthService
from .device_service import DeviceService
from .password_hashing import WerkzeugPasswordHasher
from .session_manager import DEFAULT_SESSION_TTL, SessionManager

__all__ = [
    "DEFAULT_SESSION_TTL",
    "AuthService",
    "DeviceService",
    "SessionManager",
    "WerkzeugPasswordHasher",
]
