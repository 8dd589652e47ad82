from fastapi import APIRouter, Depends, status

from gtonline.api.deps import get_auth_service
from gtonline.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, Token
from gtonline.services.auth import AuthService

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return await auth_service.register(user_data)


@router.post("/login", response_model=Token)
async def login(
    login_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Login with email and password"""
    return await auth_service.login(login_data)
