from fastapi import Depends
from studio.modules.booking.repository import BookingRepository
from studio.modules.classes.repository import ClassRepository
from studio.modules.clients.repository import ClientRepository
from studio.modules.dashboard.service import DashboardService
from studio.modules.payments.repository import PaymentRepository

def get_dashboard_service(
    client_repo: ClientRepository = Depends(),
    booking_repo: BookingRepository = Depends(),
    class_repo: ClassRepository = Depends(),
    payment_repo: PaymentRepository = Depends(),
) -> DashboardService:
    return DashboardService(client_repo, booking_repo, class_repo, payment_repo)
