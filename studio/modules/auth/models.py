from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
from enum import Enum
import uuid


class UserRole(str, Enum):
    admin = "admin"
    staff = "staff"

class User(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    username: str
    hashed_password: str
    role: UserRole = UserRole.staff
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
