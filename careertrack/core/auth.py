"""
Authentication Utility - session tokens.

Provides:
- SessionTokenService: issue/validate signed JWT session tokens
- current_identity(): identity id carried by a request, or None
- FastAPI dependencies for protected routes

Tokens are stateless. Nothing is stored server-side, so a token stays
valid until it expires; signing out only discards the client's cookie.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional
from jose import JWTError, jwt
from fastapi import Depends, Request

from careertrack.core.config import Settings
from careertrack.core.exceptions import Unauthenticated
from careertrack.schemas.schemas import SessionClaim


class SessionTokenService:
    """Signs and verifies session tokens with a single process-wide key."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 60):
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionTokenService":
        return cls(settings.jwt_secret_key, settings.jwt_algorithm, settings.jwt_expire_minutes)

    def issue(self, identity_id: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a signed token for `identity_id`."""
        issued_at = datetime.now(timezone.utc)
        expires_at = issued_at + (expires_delta or timedelta(minutes=self.expire_minutes))
        claims = {"sub": identity_id, "iat": issued_at, "exp": expires_at}
        return jwt.encode(claims, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: str) -> SessionClaim:
        """
        Verify signature and expiry.

        Raises Unauthenticated for a bad signature, a malformed token, a
        missing subject or an expired token. The reason is not exposed.
        """
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthenticated()

        subject = payload.get("sub")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not subject or issued_at is None or expires_at is None:
            raise Unauthenticated()

        return SessionClaim(
            subject=subject,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_at=datetime.fromtimestamp(expires_at, tz=timezone.utc),
        )


def extract_tokens(request: Request, cookie_name: str) -> List[str]:
    """Candidate tokens: the session cookie, then an Authorization: Bearer header."""
    tokens = []
    cookie = request.cookies.get(cookie_name)
    if cookie:
        tokens.append(cookie)
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        tokens.append(credentials.strip())
    return tokens


def current_identity(request: Request, token_service: SessionTokenService, cookie_name: str) -> Optional[str]:
    """
    Identity id of the caller, or None when no valid token is present.

    A stale cookie does not hide a valid bearer header: the first
    candidate that validates wins.
    """
    for token in extract_tokens(request, cookie_name):
        try:
            return token_service.validate(token).subject
        except Unauthenticated:
            continue
    return None


# ============================================================
# FASTAPI DEPENDENCIES
# ============================================================

def get_token_service(request: Request) -> SessionTokenService:
    return request.app.state.token_service


async def get_optional_identity(
    request: Request, token_service: SessionTokenService = Depends(get_token_service)
) -> Optional[str]:
    return current_identity(request, token_service, request.app.state.settings.session_cookie_name)


async def require_identity(identity_id: Optional[str] = Depends(get_optional_identity)) -> str:
    """
    FastAPI dependency - identity id of the authenticated caller.

    Usage:
        @router.get("/protected")
        async def route(identity_id: str = Depends(require_identity)):
            ...
    """
    if identity_id is None:
        raise Unauthenticated()
    return identity_id
