from fastapi import Depends, HTTPException
from typing import Dict
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import bcrypt
import jwt
from datetime import datetime, timezone, timedelta
from studio.modules.auth.repository import AuthRepository
from studio.core.config import JWT_ALGORITHM, JWT_EXPIRY_HOURS, JWT_SECRET

security = HTTPBearer(auto_error=False)

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode('utf-8'), hashed.encode('utf-8'))

def create_token(user_id: str, role: str) -> str:
    payload = {
        "sub": user_id,
        "role": role,
        "exp": datetime.now(timezone.utc) + timedelta(hours=JWT_EXPIRY_HOURS)
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)

async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security), auth_repo: AuthRepository = Depends()) -> Dict:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Access denied")
    try:
        payload = jwt.decode(credentials.credentials, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid token")

    user = await auth_repo.find_user_by_id(payload["sub"])
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    return user

def require_roles(*roles: str):
    """Dependency factory: the current user, if their role is one of `roles`."""
    async def checker(current_user: Dict = Depends(get_current_user)) -> Dict:
        if roles and current_user.get("role") not in roles:
            raise HTTPException(status_code=403, detail="Forbidden")
        return current_user
    return checker

staff_or_admin = require_roles("staff", "admin")
admin_only = require_roles("admin")
