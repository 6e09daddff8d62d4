"""Token Codec — issues and verifies signed session tokens (JWT via python-jose).

Invariants:
    - Payload carries id (user id), is_admin, iat and, when expiry is enabled, exp
    - verify() distinguishes absent (MissingTokenError), expired (TokenExpiredError)
      and every other failure (InvalidTokenError)
    - The signing secret is only ever handed to jose; it is never logged or echoed

Design Decisions:
    - Claim key "id" kept so tokens stay compatible with existing clients
    - exp is required on decode whenever expiry is configured, so tokens minted
      without it are rejected
"""

import logging
from datetime import datetime, timedelta, timezone

from jose import ExpiredSignatureError, JWTError, jwt

from notes_api.core.domain_types import UserId
from notes_api.core.errors import (
    InvalidTokenError, MissingTokenError, TokenExpiredError,
)
from notes_api.core.repository_protocols import UserLike
from notes_api.core.session_claims import SessionClaims

logger = logging.getLogger(__name__)


class TokenCodec:
    """HMAC-signed stateless session tokens."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = 60,
    ):
        self._secret = secret
        self._algorithm = algorithm
        self._expire = (
            timedelta(minutes=expire_minutes) if expire_minutes else None
        )

    def issue(self, user: UserLike, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        payload: dict = {
            "id": user.id,
            "is_admin": bool(user.is_admin),
            "iat": int(now.timestamp()),
        }
        if self._expire is not None:
            payload["exp"] = int((now + self._expire).timestamp())
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> SessionClaims:
        if token is None or not token.strip():
            raise MissingTokenError()
        try:
            payload = jwt.decode(
                token.strip(),
                self._secret,
                algorithms=[self._algorithm],
                options={"require_exp": self._expire is not None},
            )
        except ExpiredSignatureError:
            raise TokenExpiredError()
        except JWTError as e:
            logger.info(f"Token rejected: {type(e).__name__}")
            raise InvalidTokenError()

        user_id = payload.get("id")
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            raise InvalidTokenError()
        return SessionClaims(
            user_id=UserId(user_id),
            is_admin=payload.get("is_admin") is True,
            issued_at=_from_timestamp(payload.get("iat")),
            expires_at=_from_timestamp(payload.get("exp")),
        )


def _from_timestamp(value: object) -> datetime | None:
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    return None
