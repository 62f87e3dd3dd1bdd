from __future__ import annotations

import logging
from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from ..activity.service import ActivityLogger
from ..core.enums import ActivityType, Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError
from .model import User
from .repository import UserRepository
from .schemas import LoginParams, RegisterParams
from .tokens import TokenPair, TokenService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    user: User
    tokens: TokenPair


class AuthService:
    """Use cases: register, login, token refresh and bearer-token resolution."""

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenService,
        activity: ActivityLogger,
        *,
        allow_role_on_register: bool = False,
    ):
        self._users = users
        self._tokens = tokens
        self._activity = activity
        self._allow_role_on_register = bool(allow_role_on_register)

    def register(self, params: RegisterParams) -> AuthResult:
        if self._users.get_by_email(params.email):
            raise ConflictError("Email already registered")

        role = params.role if (params.role and self._allow_role_on_register) else Role.VIEWER
        user_id = self._users.create_user(
            name=params.name,
            email=params.email,
            password_hash=generate_password_hash(params.password),
            role=role,
        )
        user = self._users.get_by_id(user_id)
        logger.info("New user registered: %s", params.email)
        return AuthResult(user=user, tokens=self._tokens.issue_pair(user_id))

    def login(self, params: LoginParams) -> AuthResult:
        user = self._users.get_by_email(params.email)
        if not user or not user.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, params.password)
        except ValueError:
            # e.g. placeholder hashes or corrupted values
            ok = False
        if not ok:
            raise AuthenticationError("Invalid credentials")

        logger.info("User logged in: %s", user.email)
        self._activity.log(ActivityType.USER_LOGIN, f"{user.name} logged in", user.user_id, {"email": user.email})
        return AuthResult(user=user, tokens=self._tokens.issue_pair(user.user_id))

    def refresh(self, refresh_token: str) -> TokenPair:
        user_id = self._tokens.user_id_from_refresh(refresh_token)
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("User not found or inactive")
        return self._tokens.issue_pair(user.user_id)

    def resolve_access_token(self, token: str) -> User:
        if not token:
            raise AuthenticationError("Access token required")
        user_id = self._tokens.user_id_from_access(token)
        user = self._users.get_by_id(user_id)
        if not user or not user.is_active:
            raise AuthenticationError("User not found or inactive")
        return user

    def profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
