# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequestDTO(BaseModel):
    username: str = Field(min_length=3, max_length=20)
    password: str = Field(min_length=6, max_length=15)
    invite_code: str = Field(min_length=1, max_length=256, alias="inviteCode")

    model_config = ConfigDict(validate_by_name=True)


class LoginRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=1, max_length=128)  # no length rules on login


class CheckUsernameRequestDTO(BaseModel):
    username: str = Field(min_length=1, max_length=64)


class AuthSuccessDTO(BaseModel):
    id: int
    username: str
