"""
Authentication Routes

POST /register - Register new identity
POST /sign-in - Form sign-in, sets the session cookie and redirects
POST /sign-out - Clears the session cookie
POST /token - JSON sign-in for API clients, returns a bearer token
GET /me - Current identity
"""

from typing import Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import RedirectResponse
from loguru import logger

from careertrack.api.dependencies import get_credentials, get_settings_dep
from careertrack.core.auth import SessionTokenService, get_token_service, require_identity
from careertrack.core.config import Settings
from careertrack.core.exceptions import NotFound, Unauthenticated
from careertrack.services.credential_service import CredentialVerifier, public_identity
from careertrack.schemas.schemas import (
    RegisterRequest, LoginRequest, IdentityResponse, TokenResponse
)

router = APIRouter(tags=["Authentication"])

SIGN_IN_PAGE = "/auth/sign-in"
AFTER_SIGN_IN = "/dashboard"


def _sign_in_error(code: str) -> RedirectResponse:
    return RedirectResponse(f"{SIGN_IN_PAGE}?error={code}", status_code=status.HTTP_303_SEE_OTHER)


@router.post("/register", response_model=IdentityResponse, status_code=201)
def register(request: RegisterRequest, credentials: CredentialVerifier = Depends(get_credentials)):
    """
    Register a new identity.

    The email is compared case-insensitively against existing accounts.
    Sign in afterwards to get a session.
    """
    identity = credentials.register(request.email, request.password, request.name)
    return IdentityResponse(**identity)


@router.post("/sign-in")
def sign_in(
    email: Optional[str] = Form(None),
    password: Optional[str] = Form(None),
    credentials: CredentialVerifier = Depends(get_credentials),
    token_service: SessionTokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings_dep),
):
    """
    Form sign-in. On success the session cookie is set and the browser is
    sent to the dashboard; on failure back to the sign-in page with an
    error code (MissingCredentials, CredentialsSignin or AuthError).
    """
    if not email or not password:
        return _sign_in_error("MissingCredentials")

    try:
        identity = credentials.authenticate(email, password)
    except Exception:
        logger.exception("Sign-in failed unexpectedly")
        return _sign_in_error("AuthError")

    if identity is None:
        return _sign_in_error("CredentialsSignin")

    token = token_service.issue(identity["id"])
    response = RedirectResponse(AFTER_SIGN_IN, status_code=status.HTTP_303_SEE_OTHER)
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=token_service.expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    logger.info("Signed in {}", identity["id"])
    return response


@router.post("/sign-out")
def sign_out(settings: Settings = Depends(get_settings_dep)):
    """
    Discard the session cookie.

    The token itself stays valid until it expires; there is no
    server-side revocation.
    """
    response = RedirectResponse(SIGN_IN_PAGE, status_code=status.HTTP_303_SEE_OTHER)
    response.delete_cookie(settings.session_cookie_name)
    return response


@router.post("/token", response_model=TokenResponse)
def issue_token(
    request: LoginRequest,
    credentials: CredentialVerifier = Depends(get_credentials),
    token_service: SessionTokenService = Depends(get_token_service),
):
    """
    Sign in and receive a bearer token.

    Include token in requests: Authorization: Bearer <token>
    """
    identity = credentials.authenticate(request.email, request.password)
    if identity is None:
        raise Unauthenticated("Invalid email or password")

    token = token_service.issue(identity["id"])
    return TokenResponse(access_token=token, expires_at=token_service.validate(token).expires_at)


@router.get("/me", response_model=IdentityResponse)
def get_me(identity_id: str = Depends(require_identity), credentials: CredentialVerifier = Depends(get_credentials)):
    """Get the current identity."""
    user = credentials.users.find_by_id(identity_id)
    if user is None:
        raise NotFound("identity not found")
    return IdentityResponse(**public_identity(user))
