from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from datetime import datetime
from enum import Enum
import uuid


class EquipmentStatus(str, Enum):
    available = "available"
    out = "out"
    maintenance = "maintenance"

class Equipment(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=True)
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    type: Optional[str] = None
    status: EquipmentStatus = EquipmentStatus.available
    specs: Dict[str, Any] = {}
    purchase_date: Optional[datetime] = None

class EquipmentCreate(BaseModel):
    name: str
    type: Optional[str] = None
    status: EquipmentStatus = EquipmentStatus.available
    specs: Dict[str, Any] = {}
    purchase_date: Optional[datetime] = None

class EquipmentUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[EquipmentStatus] = None
    specs: Optional[Dict[str, Any]] = None
    purchase_date: Optional[datetime] = None
