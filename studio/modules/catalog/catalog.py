from pydantic import BaseModel, Field
from typing import List, Optional
from enum import Enum


class ServiceKind(str, Enum):
    room = "room"
    equipment = "equipment"
    class_session = "class"
    service = "service"

# Kinds whose bookings hold a resource exclusively.
EXCLUSIVE_KINDS = (ServiceKind.room.value, ServiceKind.equipment.value)

class PriceUnit(str, Enum):
    hour = "hour"
    session = "session"
    bundle = "bundle"
    custom = "custom"

class CatalogAddOn(BaseModel):
    code: str
    name: str
    amount: float

class ServiceDefaults(BaseModel):
    full_price: Optional[float] = None
    price_unit: PriceUnit = PriceUnit.custom
    duration_minutes: Optional[int] = None
    sessions: Optional[int] = None
    total_sessions: Optional[int] = None
    add_ons: List[CatalogAddOn] = []

class ServiceDefinition(BaseModel):
    code: str
    name: str
    category: ServiceKind
    defaults: ServiceDefaults = Field(default_factory=ServiceDefaults)
    description: str = ""
    requires_enrollment_tracking: bool = False

    @property
    def billed_by_duration(self) -> bool:
        return self.defaults.price_unit == PriceUnit.hour


SERVICE_CATALOG: List[ServiceDefinition] = [
    ServiceDefinition(
        code="room_rental",
        name="Room Rental",
        category=ServiceKind.room,
        defaults=ServiceDefaults(full_price=20, price_unit=PriceUnit.hour, duration_minutes=60),
        description="Studio room rental, billed per hour.",
    ),
    ServiceDefinition(
        code="private_dj_class",
        name="Private DJ Class",
        category=ServiceKind.class_session,
        defaults=ServiceDefaults(full_price=45, price_unit=PriceUnit.session, duration_minutes=90, sessions=1),
        description="1.5 hour private DJ coaching session.",
    ),
    ServiceDefinition(
        code="video_recording",
        name="Video Recording",
        category=ServiceKind.service,
        defaults=ServiceDefaults(
            full_price=60,
            price_unit=PriceUnit.hour,
            duration_minutes=60,
            add_ons=[CatalogAddOn(code="extra_cam", name="Extra Camera", amount=20)],
        ),
        description="Video recording session, base rate per hour. Add 20 for an extra camera.",
    ),
    ServiceDefinition(
        code="equipment_rental",
        name="Equipment Rental",
        category=ServiceKind.equipment,
        defaults=ServiceDefaults(price_unit=PriceUnit.custom),
        description="Rental of studio equipment. Pricing entered manually per item.",
    ),
    ServiceDefinition(
        code="production_consulting",
        name="Production Consulting",
        category=ServiceKind.service,
        defaults=ServiceDefaults(full_price=60, price_unit=PriceUnit.hour, duration_minutes=60),
        description="Music production consulting, billed per hour.",
    ),
    ServiceDefinition(
        code="dj_class_level1",
        name="DJ Class Level 1 Bundle (10 sessions)",
        category=ServiceKind.class_session,
        defaults=ServiceDefaults(full_price=400, price_unit=PriceUnit.bundle, total_sessions=10, duration_minutes=90),
        description="Level 1 DJ course consisting of 10 sessions.",
        requires_enrollment_tracking=True,
    ),
    ServiceDefinition(
        code="dj_class_level2",
        name="DJ Class Level 2 Bundle (10 sessions)",
        category=ServiceKind.class_session,
        defaults=ServiceDefaults(full_price=500, price_unit=PriceUnit.bundle, total_sessions=10, duration_minutes=90),
        description="Level 2 DJ course consisting of 10 sessions.",
        requires_enrollment_tracking=True,
    ),
]

SERVICE_CODES = [service.code for service in SERVICE_CATALOG]


def find_service(code: Optional[str]) -> Optional[ServiceDefinition]:
    if not code:
        return None
    return next((service for service in SERVICE_CATALOG if service.code == code), None)


def service_category(code: Optional[str]) -> Optional[str]:
    service = find_service(code)
    return service.category.value if service else None
