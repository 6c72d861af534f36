"""Token schemas - login result and the cross-service validation contract."""

from pydantic import BaseModel


class TokenResult(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class ValidateTokenRequest(BaseModel):
    token: str


class ValidationResult(BaseModel):
    """
    Outcome of validating a token. A rejected token is a normal result, not an
    error, so remote callers can tell "token rejected" apart from "service down".
    """

    valid: bool
    user_id: str | None = None
    email: str | None = None
    reason: str | None = None
