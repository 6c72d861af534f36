"""
Security: password hashing and JWT issuance/validation.
Challenge: Tokens are verified in another process that never sees the secret,
so every rejection reason must be safe to hand back over the wire.
Design: TokenManager owns the secret; nothing else reads it.
"""

import time
from dataclasses import dataclass
from typing import Callable, Protocol

from jose import jws, jwt
from jose.exceptions import JWSError, JWTError
from passlib.context import CryptContext

from identity_api.core.exceptions import SigningError, TokenValidationError

DEFAULT_TOKEN_TTL = 3600

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """One-way salted hash for storage. Never store plain passwords."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Constant-time comparison for login."""
    return pwd_context.verify(plain, hashed)


def dummy_verify() -> None:
    """Spend the same time as a real verify when there is no stored hash."""
    pwd_context.dummy_verify()


class TokenSubject(Protocol):
    id: object
    email: str


@dataclass(frozen=True)
class Claims:
    """Verified identity facts extracted from a token."""

    user_id: str
    email: str


class TokenManager:
    """Issues and validates HMAC-signed JWTs carrying the user's id and email."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int = DEFAULT_TOKEN_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            ttl_seconds = DEFAULT_TOKEN_TTL
        self._secret = secret
        self.ttl_seconds = ttl_seconds
        self.algorithm = algorithm
        self._clock = clock

    def _now(self) -> int:
        return int(self._clock())

    def issue(self, user: TokenSubject) -> tuple[str, int]:
        """Sign a token for user. Returns (token, ttl in seconds)."""
        subject = str(user.id) if user.id else ""
        if not subject:
            raise SigningError("user id is empty")
        if not self._secret:
            raise SigningError("signing secret is empty")

        issued_at = self._now()
        claims = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + self.ttl_seconds,
            "email": user.email,
        }
        try:
            token = jwt.encode(claims, self._secret, algorithm=self.algorithm)
        except (JWTError, JWSError) as exc:
            raise SigningError("sign token failed") from exc
        return token, self.ttl_seconds

    def validate(self, token: str) -> Claims:
        """
        Verify signature, algorithm and expiry. Raises TokenValidationError with a
        client-safe reason. Expiry is strict: a token is dead at its exp second.
        """
        try:
            header = jwt.get_unverified_header(token)
            payload = jwt.get_unverified_claims(token)
        except JWTError:
            raise TokenValidationError("token is malformed")

        alg = header.get("alg")
        if alg != self.algorithm:
            raise TokenValidationError(f"unexpected signing method: {alg}")

        if not self._secret:
            raise TokenValidationError("token signature is invalid")
        try:
            jws.verify(token, self._secret, algorithms=[self.algorithm])
        except JWSError:
            raise TokenValidationError("token signature is invalid")

        expires_at = payload.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, int):
            raise TokenValidationError("token is malformed")
        if self._now() >= expires_at:
            raise TokenValidationError("token has expired")

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise TokenValidationError("token missing subject")

        email = payload.get("email")
        return Claims(user_id=subject, email=email if isinstance(email, str) else "")
