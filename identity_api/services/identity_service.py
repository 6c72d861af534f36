"""
Identity service - registration, login and token validation.
Challenge: Login must not reveal whether an email is registered.
Design: Depends on UserRepository and TokenManager only; endpoints stay thin.
"""

import logging

from sqlalchemy.exc import IntegrityError

from identity_api.core.exceptions import (
    ConflictError,
    TokenValidationError,
    UnauthorizedError,
    ValidationError,
)
from identity_api.core.security import TokenManager, dummy_verify, hash_password, verify_password
from identity_api.db.models.user import User
from identity_api.db.repositories.user_repository import UserRepository
from identity_api.schemas.token import TokenResult, ValidationResult

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_BYTES = 72  # bcrypt ignores anything past this
MIN_DISPLAY_NAME_LENGTH = 3

INVALID_CREDENTIALS = "invalid credentials"


def normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityService:
    """Handles identity use cases: register, login, validate_token."""

    def __init__(self, user_repo: UserRepository, tokens: TokenManager):
        self.user_repo = user_repo
        self.tokens = tokens

    async def register(self, email: str, password: str, display_name: str) -> User:
        """Hash the password and persist a new user. Raises ConflictError on duplicate email."""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"password must be at most {MAX_PASSWORD_BYTES} bytes")
        display_name = display_name.strip()
        if len(display_name) < MIN_DISPLAY_NAME_LENGTH:
            raise ValidationError(
                f"display name must be at least {MIN_DISPLAY_NAME_LENGTH} characters"
            )

        email = normalize_email(email)
        if await self.user_repo.get_by_email(email):
            raise ConflictError("email already exists")

        user = User(email=email, hashed_password=hash_password(password), display_name=display_name)
        try:
            user = await self.user_repo.add(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration for the same email
            raise ConflictError("email already exists") from exc

        logger.info("registered user id=%s", user.id)
        return user

    async def login(self, email: str, password: str) -> TokenResult:
        """Verify credentials and issue a token. Both failure paths look identical to the caller."""
        email = normalize_email(email)
        user = await self.user_repo.get_by_email(email)
        if user is None:
            dummy_verify()
            logger.warning("login failed: user not found email=%s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        # bcrypt only sees the first 72 bytes; a longer password never matches
        matched = verify_password(password, user.hashed_password)
        if not matched or len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            logger.warning("login failed: password mismatch email=%s", email)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        token, ttl = self.tokens.issue(user)
        return TokenResult(access_token=token, expires_in=ttl)

    def validate_token(self, token: str) -> ValidationResult:
        """Never raises for a bad token; the rejection is part of the result."""
        try:
            claims = self.tokens.validate(token)
        except TokenValidationError as exc:
            logger.warning("token validation failed: %s", exc.message)
            return ValidationResult(valid=False, reason=exc.message)
        return ValidationResult(valid=True, user_id=claims.user_id, email=claims.email)
