from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional
from enum import Enum
import uuid


class ClientType(str, Enum):
    individual = "individual"
    company = "company"
    student = "student"

class Client(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: ClientType
    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None

class ClientCreate(BaseModel):
    type: ClientType
    name: str
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None

class ClientUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)
    type: Optional[ClientType] = None
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    company_name: Optional[str] = None
    contact_person: Optional[str] = None
    notes: Optional[str] = None
