"""
Identity endpoints - register, login and token validation.
Design: Thin controller; IdentityService raises typed errors rendered in main.py.
"""

from fastapi import APIRouter, status

from identity_api.core.dependencies import IdentityServiceDep
from identity_api.schemas.token import TokenResult, ValidateTokenRequest, ValidationResult
from identity_api.schemas.user import Credentials, UserCreate, UserResponse

router = APIRouter()


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(svc: IdentityServiceDep, data: UserCreate):
    """Create new user. Returns user without password."""
    user = await svc.register(data.email, data.password, data.display_name)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=TokenResult)
async def login(svc: IdentityServiceDep, data: Credentials):
    """Authenticate and return a signed access token."""
    return await svc.login(data.email, data.password)


@router.post("/validate", response_model=ValidationResult, response_model_exclude_none=True)
async def validate_token(svc: IdentityServiceDep, data: ValidateTokenRequest):
    """Validate a token for another service. Always 200; rejection is in the body."""
    return svc.validate_token(data.token)
