from fastapi import APIRouter, Depends
from typing import Dict
from studio.modules.auth.schemas import TokenResponse, UserLogin, UserRegister, UserResponse
from studio.modules.auth.service import AuthService
from studio.modules.auth.dependencies import get_auth_service
from studio.modules.auth.utility import get_current_user

auth_router = APIRouter(prefix="/auth", tags=["Auth"])

@auth_router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    data: UserRegister,
    service: AuthService = Depends(get_auth_service)
    ):
    return await service.register(data)

@auth_router.post("/login", response_model=TokenResponse)
async def login(
    data: UserLogin,
    service: AuthService = Depends(get_auth_service)
    ):
    return await service.login(data)

@auth_router.post("/logout")
async def logout(service: AuthService = Depends(get_auth_service)):
    return await service.logout()

@auth_router.get("/me", response_model=UserResponse)
async def get_me(
     current_user: Dict = Depends(get_current_user),
     service: AuthService = Depends(get_auth_service)
    ):
     return await service.get_me(current_user)
