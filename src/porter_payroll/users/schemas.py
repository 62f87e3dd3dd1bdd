from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import PayloadChecker
from ..core.constants import MIN_NAME_LENGTH, MIN_PASSWORD_LENGTH
from ..core.enums import Role


@dataclass(frozen=True)
class RegisterParams:
    name: str
    email: str
    password: str
    role: Optional[Role]


@dataclass(frozen=True)
class LoginParams:
    email: str
    password: str


def parse_register(payload: dict) -> RegisterParams:
    c = PayloadChecker(payload)
    name = c.string("name", min_len=MIN_NAME_LENGTH, message="Name must be at least 2 characters")
    email = c.email("email")
    password = c.string("password", strip=False, min_len=MIN_PASSWORD_LENGTH, message="Password must be at least 6 characters")
    role = c.choice("role", [r.value for r in Role], required=False)
    c.raise_if_errors()
    return RegisterParams(name=name, email=email, password=password, role=Role(role) if role else None)


def parse_login(payload: dict) -> LoginParams:
    c = PayloadChecker(payload)
    email = c.email("email")
    password = c.string("password", strip=False, min_len=1, message="Password is required")
    c.raise_if_errors()
    return LoginParams(email=email, password=password)


def parse_refresh(payload: dict) -> str:
    c = PayloadChecker(payload)
    token = c.string("refreshToken", min_len=1, message="Refresh token is required")
    c.raise_if_errors()
    return token
