from typing import Optional
from datetime import datetime
from studio.core.errors import NotFoundError
from studio.modules.booking.repository import BookingRepository
from studio.modules.enrollments.repository import EnrollmentRepository
from studio.modules.payments.models import Payment, PaymentCreate, PaymentUpdate
from studio.modules.payments.reconciliation import PaymentReconciler
from studio.modules.payments.repository import PaymentRepository


class PaymentService:
    def __init__(
        self,
        payment_repo: PaymentRepository,
        booking_repo: BookingRepository,
        enrollment_repo: EnrollmentRepository,
        reconciler: PaymentReconciler,
    ):
        self.payment_repo = payment_repo
        self.booking_repo = booking_repo
        self.enrollment_repo = enrollment_repo
        self.reconciler = reconciler

    async def _check_links(self, data: dict):
        if data.get("booking_id") and not await self.booking_repo.find_booking(data["booking_id"]):
            raise NotFoundError("Booking not found")
        if data.get("enrollment_id") and not await self.enrollment_repo.find_enrollment(data["enrollment_id"]):
            raise NotFoundError("Enrollment not found")

    async def create_payment(self, data: PaymentCreate):
        payment_data = data.model_dump(exclude_none=True)
        await self._check_links(payment_data)
        payment = await self.payment_repo.add_payment(Payment(**payment_data))
        await self.reconciler.reconcile_payment_targets(payment)
        return payment

    async def get_payments(
        self,
        client_id: Optional[str] = None,
        booking_id: Optional[str] = None,
        class_id: Optional[str] = None,
        enrollment_id: Optional[str] = None,
        type: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ):
        query = {}
        filters = {
            "client_id": client_id,
            "booking_id": booking_id,
            "class_id": class_id,
            "enrollment_id": enrollment_id,
            "type": type,
        }
        for field, value in filters.items():
            if value:
                query[field] = value
        if start_date or end_date:
            query["date"] = {}
            if start_date:
                query["date"]["$gte"] = start_date
            if end_date:
                query["date"]["$lte"] = end_date
        return await self.payment_repo.find_payments(query)

    async def get_payment(self, payment_id: str):
        payment = await self.payment_repo.find_payment(payment_id)
        if not payment:
            raise NotFoundError("Payment not found")
        return payment

    async def update_payment(self, payment_id: str, data: PaymentUpdate):
        before = await self.get_payment(payment_id)
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return before
        await self._check_links(update_data)
        payment = await self.payment_repo.update_payment(payment_id, update_data)
        if not payment:
            raise NotFoundError("Payment not found")
        # A payment moved to another booking changes both the old and the new one.
        await self.reconciler.reconcile_payment_targets(before, payment)
        return payment

    async def delete_payment(self, payment_id: str):
        payment = await self.get_payment(payment_id)
        if not await self.payment_repo.delete_payment(payment_id):
            raise NotFoundError("Payment not found")
        await self.reconciler.reconcile_payment_targets(payment)
        return {"message": "Payment deleted"}
