"""Authentication API routes."""

from fastapi import APIRouter, status

from taskhub.core.auth.schemas import AccessToken
from taskhub.core.auth.service import AuthSvc
from taskhub.modules.users.schemas import LoginRequest, RegisterRequest, UserResponse


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(data: RegisterRequest, service: AuthSvc) -> UserResponse:
    user = await service.register(
        email=data.email,
        password=data.password,
        full_name=data.full_name,
    )
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=AccessToken,
    summary="Login with email and password",
)
async def login(data: LoginRequest, service: AuthSvc) -> AccessToken:
    _user, token = await service.login(email=data.email, password=data.password)
    return token
