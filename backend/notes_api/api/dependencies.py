"""Request Dependencies — the admission pipeline and service wiring for routes.

Invariants:
    - Rate admission itself lives in api/admission.py; it reuses client_identity()
    - get_current_claims reads only the auth-token header
    - Process-wide collaborators (limiter, codec, hasher) are built once from Settings
    - Request-scoped services get a fresh AsyncSession per request

Design Decisions:
    - lru_cache singletons mirror get_settings(): tests replace them through
      app.dependency_overrides instead of patching module globals
"""

from functools import lru_cache

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from notes_api.config import Settings, get_settings
from notes_api.core.domain_types import ClientId
from notes_api.core.errors import ErrorContext, InvalidTokenError
from notes_api.core.session_claims import SessionClaims
from notes_api.infrastructure.database import get_db
from notes_api.infrastructure.password_hasher import PasswordHasher
from notes_api.infrastructure.sql_repositories import (
    SqlNoteRepository, SqlUserRepository,
)
from notes_api.infrastructure.token_codec import TokenCodec
from notes_api.services.account_service import AccountService
from notes_api.services.note_service import NoteService
from notes_api.services.rate_limiter import RateLimiter

AUTH_TOKEN_HEADER = "auth-token"


@lru_cache
def get_rate_limiter() -> RateLimiter:
    settings = get_settings()
    return RateLimiter.from_policy(
        settings.rate_limit_policy,
        settings.rate_limit_per_minute,
        settings.rate_window_seconds,
    )


@lru_cache
def get_token_codec() -> TokenCodec:
    settings = get_settings()
    return TokenCodec(
        settings.token_secret.get_secret_value(),
        algorithm=settings.token_algorithm,
        expire_minutes=settings.token_expire_minutes,
    )


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasswordHasher(rounds=get_settings().bcrypt_rounds)


def client_identity(request: Request, trust_forwarded_for: bool) -> ClientId:
    """First X-Forwarded-For hop when trusted, else the peer address."""
    if trust_forwarded_for:
        forwarded = request.headers.get("x-forwarded-for", "")
        first_hop = forwarded.split(",")[0].strip()
        if first_hop:
            return ClientId(first_hop)
    if request.client is not None:
        return ClientId(request.client.host)
    return ClientId("unknown")


async def get_current_claims(
    auth_token: str | None = Header(None, alias=AUTH_TOKEN_HEADER),
    codec: TokenCodec = Depends(get_token_codec),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> SessionClaims:
    claims = codec.verify(auth_token)
    if settings.token_require_existing_user:
        if await SqlUserRepository(db).get_by_id(claims.user_id) is None:
            raise InvalidTokenError(context=ErrorContext(user_id=claims.user_id))
    return claims


def get_note_service(db: AsyncSession = Depends(get_db)) -> NoteService:
    return NoteService(SqlNoteRepository(db))


def get_account_service(
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_password_hasher),
    codec: TokenCodec = Depends(get_token_codec),
) -> AccountService:
    return AccountService(SqlUserRepository(db), hasher, codec)
