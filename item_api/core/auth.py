"""
Authorization gateway - turns a bearer credential into a local identity.
Challenge: This service cannot verify tokens itself; every request asks the
identity service, and an unreachable identity service must mean "not authorized".
Design: TokenValidator is the single injected capability. It returns a tagged
outcome (Claims or Rejected) and raises only for transport failures.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from item_api.core.exceptions import IdentityUnavailableError, UnauthorizedError

logger = logging.getLogger(__name__)

VALIDATE_PATH = "/api/v1/identity/validate"
BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class Claims:
    """Identity facts the identity service vouched for."""

    user_id: str
    email: str


@dataclass(frozen=True)
class Rejected:
    """The identity service looked at the token and said no."""

    reason: str


ValidationOutcome = Claims | Rejected


class TokenValidator(Protocol):
    """Protocol for token validation - allows swapping the remote call for a test double."""

    async def validate(self, token: str) -> ValidationOutcome:
        """
        Validate a bearer token.

        Returns:
            Claims when the token is accepted, Rejected(reason) otherwise.
        Raises:
            IdentityUnavailableError when no answer could be obtained.
        """
        ...


class IdentityClient:
    """TokenValidator backed by the identity service's HTTP validate endpoint."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url.rstrip("/"), timeout=timeout)

    async def validate(self, token: str) -> ValidationOutcome:
        try:
            response = await self._client.post(VALIDATE_PATH, json={"token": token})
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPError as exc:
            raise IdentityUnavailableError(f"validate call failed: {exc!r}") from exc
        except ValueError as exc:
            raise IdentityUnavailableError("validate returned a non-JSON body") from exc

        if not isinstance(body, dict) or not isinstance(body.get("valid"), bool):
            raise IdentityUnavailableError("validate returned an unexpected body")
        if not body["valid"]:
            return Rejected(body.get("reason") or "token validation failed")
        return Claims(user_id=body.get("user_id") or "", email=body.get("email") or "")

    async def aclose(self) -> None:
        await self._client.aclose()


def extract_token(value: str) -> str:
    """Accept "Bearer <token>" (any case) or a bare token. Returns "" when nothing usable."""
    value = value.strip()
    if not value:
        return ""
    parts = value.split(None, 1)
    if parts[0].lower() == BEARER_SCHEME:
        return parts[1].strip() if len(parts) == 2 else ""
    return value


class AuthorizationGateway:
    """Resolves the caller's identity for a single request. Fails closed."""

    def __init__(self, validator: TokenValidator):
        self.validator = validator

    async def authorize(self, raw: str | None) -> Claims:
        token = extract_token(raw or "")
        if not token:
            raise UnauthorizedError("missing credential")

        try:
            outcome = await self.validator.validate(token)
        except IdentityUnavailableError as exc:
            logger.error("cannot authorize request, identity service unavailable: %s", exc)
            raise UnauthorizedError("not authorized") from exc

        if isinstance(outcome, Rejected):
            logger.info("token rejected by identity service: %s", outcome.reason)
            raise UnauthorizedError(outcome.reason)
        return outcome
