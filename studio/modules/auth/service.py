import logging
from fastapi import HTTPException
from typing import Dict
from studio.modules.auth.repository import AuthRepository
from studio.modules.auth.schemas import TokenResponse, UserLogin, UserRegister, UserResponse
from studio.modules.auth.models import User, UserRole
from studio.modules.auth.utility import hash_password, create_token, verify_password


class AuthService:
    def __init__(self, auth_repo: AuthRepository):
        self.auth_repo = auth_repo

    async def register(self, data: UserRegister) -> TokenResponse:
        if await self.auth_repo.user_exists(data.username):
            raise HTTPException(status_code=400, detail="User already exists")

        user = User(
            username=data.username,
            role=data.role or UserRole.staff,
            hashed_password=hash_password(data.password)
        )
        await self.auth_repo.create_user(user)
        logging.info(f"Registered user {user.username} with role {user.role}")

        return self._token_response(user.model_dump())

    async def login(self, data: UserLogin) -> TokenResponse:
        user = await self.auth_repo.find_user(data.username)
        if not user or not verify_password(data.password, user["hashed_password"]):
            raise HTTPException(status_code=400, detail="Invalid credentials")
        return self._token_response(user)

    async def get_me(self, current_user: Dict) -> UserResponse:
        return UserResponse(
            id=current_user["id"],
            username=current_user["username"],
            role=UserRole(current_user["role"])
        )

    async def logout(self):
        # Tokens are stateless; the client drops its copy.
        return {"message": "Logged out successfully"}

    def _token_response(self, user: Dict) -> TokenResponse:
        token = create_token(user["id"], user["role"])
        return TokenResponse(
            access_token=token,
            user=UserResponse(id=user["id"], username=user["username"], role=UserRole(user["role"]))
        )
