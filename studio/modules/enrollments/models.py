from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime, timezone
import uuid
from studio.modules.booking.models import PaymentStatus


class Enrollment(BaseModel):
    model_config = ConfigDict(use_enum_values=True, extra="ignore")
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    class_id: str
    student_id: str
    enrolled_on: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    payment_status: PaymentStatus = PaymentStatus.unpaid
    feedback: Optional[str] = None

class EnrollmentCreate(BaseModel):
    class_id: str = Field(min_length=1)
    student_id: str = Field(min_length=1)
    feedback: Optional[str] = None

class EnrollmentUpdate(BaseModel):
    feedback: Optional[str] = None
