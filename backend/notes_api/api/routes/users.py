"""User Routes — registration and login.

Invariants:
    - Both routes pass rate admission; neither requires a token
    - Register returns the PublicUser projection (no password, no hash)
    - Login returns the token in the body AND in the auth-token response header
"""

import logging

from fastapi import APIRouter, Depends, Response

from notes_api.api.admission import RateAdmittedRoute
from notes_api.api.dependencies import AUTH_TOKEN_HEADER, get_account_service
from notes_api.schemas.user import (
    LoginRequest, PublicUser, RegisterRequest, TokenResponse,
)
from notes_api.services.account_service import AccountService

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/users", tags=["users"],
    route_class=RateAdmittedRoute,
)


@router.post("/register", response_model=PublicUser)
async def register(
    body: RegisterRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """Create an account. is_admin is honored only when explicitly supplied."""
    user = await accounts.register(
        body.name, body.username, body.password, body.is_admin,
    )
    return PublicUser.model_validate(user)


@router.post("/login", response_model=TokenResponse)
async def login(
    response: Response,
    body: LoginRequest | None = None,
    accounts: AccountService = Depends(get_account_service),
):
    """Exchange username/password for a session token."""
    body = body or LoginRequest()
    token = await accounts.login(body.username, body.password)
    response.headers[AUTH_TOKEN_HEADER] = token
    return TokenResponse(token=token)
