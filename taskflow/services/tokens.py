"""Token service: signed, time-limited bearer tokens carrying user identity."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from taskflow.errors import AuthenticationError

logger = logging.getLogger(__name__)

# JWT configuration
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_DAYS = 7


@dataclass(frozen=True)
class Identity:
    """Authenticated caller, as decoded from a verified token."""

    id: str
    email: str
    username: str


class TokenService:
    """Issues and verifies HS256 JWTs with a server-held secret.

    There is no revocation list: a token stays valid until it expires.
    """

    def __init__(
        self,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must be configured to issue tokens")
        self._secret_key = secret_key
        self.expires_delta = expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS)

    def issue(self, identity: Identity, now: Optional[datetime] = None) -> str:
        """Create a signed access token for ``identity``."""
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": identity.id,
            "email": identity.email,
            "username": identity.username,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(claims, self._secret_key, algorithm=ALGORITHM)

    def verify(self, token: str) -> Identity:
        """Decode and validate a token.

        Raises AuthenticationError on a bad signature, malformed token,
        expiry, or missing identity claims.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[ALGORITHM])
        except JWTError as exc:
            logger.warning("Rejected access token: %s", exc)
            raise AuthenticationError("Invalid token") from None

        user_id = payload.get("sub")
        email = payload.get("email")
        username = payload.get("username")
        if not user_id or not email or not username:
            logger.warning("Rejected access token: missing identity claims")
            raise AuthenticationError("Invalid token")
        return Identity(id=user_id, email=email, username=username)
