from studio.modules.booking.repository import BookingRepository
from studio.modules.classes.repository import ClassRepository
from studio.modules.clients.repository import ClientRepository
from studio.modules.payments.repository import PaymentRepository


class DashboardService:
    def __init__(
        self,
        client_repo: ClientRepository,
        booking_repo: BookingRepository,
        class_repo: ClassRepository,
        payment_repo: PaymentRepository,
    ):
        self.client_repo = client_repo
        self.booking_repo = booking_repo
        self.class_repo = class_repo
        self.payment_repo = payment_repo

    async def get_summary(self):
        totals = await self.payment_repo.sum_by_type({})
        by_status = await self.booking_repo.count_by_payment_status()
        return {
            "total_clients": await self.client_repo.count_clients(),
            "total_bookings": await self.booking_repo.count_bookings(),
            "total_classes": await self.class_repo.count_classes(),
            "total_income": totals["income"],
            "total_expense": totals["expense"],
            "bookings_by_payment_status": {
                status: by_status.get(status, 0) for status in ("unpaid", "partial", "paid")
            },
        }
