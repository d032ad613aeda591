from fastapi import APIRouter, Depends
from typing import Optional
from datetime import datetime
from studio.core.intervals import normalize_datetime
from studio.modules.auth.utility import admin_only, staff_or_admin
from studio.modules.payments.dependencies import get_payment_service
from studio.modules.payments.models import PaymentCreate, PaymentType, PaymentUpdate
from studio.modules.payments.service import PaymentService

payment_router = APIRouter(prefix="/payments", tags=["Payments"])

@payment_router.post("/", status_code=201, dependencies=[Depends(staff_or_admin)])
async def create_payment(data: PaymentCreate, payment_service: PaymentService = Depends(get_payment_service)):
    return await payment_service.create_payment(data)

@payment_router.get("/", dependencies=[Depends(staff_or_admin)])
async def get_payments(
    client_id: Optional[str] = None,
    booking_id: Optional[str] = None,
    class_id: Optional[str] = None,
    enrollment_id: Optional[str] = None,
    type: Optional[PaymentType] = None,
    start_date: Optional[datetime] = None,
    end_date: Optional[datetime] = None,
    payment_service: PaymentService = Depends(get_payment_service)
):
    return await payment_service.get_payments(
        client_id=client_id,
        booking_id=booking_id,
        class_id=class_id,
        enrollment_id=enrollment_id,
        type=type.value if type else None,
        start_date=normalize_datetime(start_date),
        end_date=normalize_datetime(end_date)
    )

@payment_router.get("/{payment_id}", dependencies=[Depends(staff_or_admin)])
async def get_payment(payment_id: str, payment_service: PaymentService = Depends(get_payment_service)):
    return await payment_service.get_payment(payment_id)

@payment_router.put("/{payment_id}", dependencies=[Depends(staff_or_admin)])
async def update_payment(payment_id: str, data: PaymentUpdate, payment_service: PaymentService = Depends(get_payment_service)):
    return await payment_service.update_payment(payment_id, data)

@payment_router.delete("/{payment_id}", dependencies=[Depends(admin_only)])
async def delete_payment(payment_id: str, payment_service: PaymentService = Depends(get_payment_service)):
    return await payment_service.delete_payment(payment_id)
