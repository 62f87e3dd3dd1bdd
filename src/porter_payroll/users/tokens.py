from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.exceptions import AuthenticationError

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str

    def to_dict(self) -> dict:
        return {"accessToken": self.access_token, "refreshToken": self.refresh_token}


class TokenService:
    """Issues and verifies the short-lived access / long-lived refresh JWT pair.

    The token only carries the user id; the role is always read back from the
    user record.
    """

    def __init__(
        self,
        *,
        access_secret: str,
        refresh_secret: str,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        self._access_secret = access_secret
        self._refresh_secret = refresh_secret
        self._access_ttl = access_ttl
        self._refresh_ttl = refresh_ttl

    def _encode(self, user_id: int, *, kind: str, secret: str, ttl: timedelta, now: datetime) -> str:
        payload = {"sub": str(user_id), "type": kind, "iat": now, "exp": now + ttl}
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def issue_pair(self, user_id: int, *, now: Optional[datetime] = None) -> TokenPair:
        now = now or datetime.now(timezone.utc)
        return TokenPair(
            access_token=self._encode(user_id, kind="access", secret=self._access_secret, ttl=self._access_ttl, now=now),
            refresh_token=self._encode(user_id, kind="refresh", secret=self._refresh_secret, ttl=self._refresh_ttl, now=now),
        )

    def _decode(self, token: str, *, kind: str, secret: str) -> int:
        try:
            payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        if payload.get("type") != kind:
            raise AuthenticationError("Invalid token")
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")

    def user_id_from_access(self, token: str) -> int:
        return self._decode(token, kind="access", secret=self._access_secret)

    def user_id_from_refresh(self, token: str) -> int:
        return self._decode(token, kind="refresh", secret=self._refresh_secret)
