"""
Credential Verifier

Turns an email/password pair into a verified identity, or a uniform
failure. Passwords are hashed with bcrypt through passlib; the cost
factor comes from settings.

authenticate() returns None for an unknown email and for a wrong
password alike, and both paths run one bcrypt verification so response
timing does not reveal which one happened.
"""

from typing import Optional
from uuid import uuid4

from email_validator import EmailNotValidError, validate_email
from loguru import logger
from passlib.context import CryptContext

from careertrack.core.exceptions import Conflict, ValidationFailure
from careertrack.db.repositories import UserRepository

MIN_PASSWORD_LENGTH = 6


def build_password_context(rounds: int = 12) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def public_identity(user: dict) -> dict:
    """Identity without the password hash."""
    return {k: v for k, v in user.items() if k != "password_hash"}


class CredentialVerifier:

    def __init__(self, users: UserRepository, pwd_context: CryptContext):
        self.users = users
        self.pwd_context = pwd_context
        # verified against when the email is unknown
        self._dummy_hash = pwd_context.hash(uuid4().hex)

    def hash_password(self, password: str) -> str:
        return self.pwd_context.hash(password)

    def register(self, email: str, password: str, display_name: Optional[str] = None) -> dict:
        """
        Create a new identity.

        Raises ValidationFailure for a malformed email or a short password,
        Conflict when the email (compared case-insensitively) is taken.
        """
        try:
            email = validate_email(email, check_deliverability=False).normalized
        except EmailNotValidError:
            raise ValidationFailure("Invalid email address")
        if password is None or len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailure(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if self.users.find_by_email(email):
            raise Conflict("Email already registered")

        user = self.users.create(email, self.hash_password(password), display_name)
        logger.info("Registered identity {}", user["id"])
        return public_identity(user)

    def authenticate(self, email: str, password: str) -> Optional[dict]:
        """Return the identity for valid credentials, None otherwise."""
        user = self.users.find_by_email(email or "")
        if user is None:
            self.pwd_context.verify(password or "", self._dummy_hash)
            return None
        if not self.pwd_context.verify(password or "", user["password_hash"]):
            return None
        return public_identity(user)
