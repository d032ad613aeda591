from typing import Optional
from studio.core.errors import ConflictError, NotFoundError
from studio.core.locks import ResourceLocks, resource_locks
from studio.modules.classes.repository import ClassRepository
from studio.modules.clients.repository import ClientRepository
from studio.modules.enrollments.models import Enrollment, EnrollmentCreate, EnrollmentUpdate
from studio.modules.enrollments.repository import EnrollmentRepository


class EnrollmentService:
    def __init__(
        self,
        enrollment_repo: EnrollmentRepository,
        class_repo: ClassRepository,
        client_repo: ClientRepository,
        locks: ResourceLocks = resource_locks,
    ):
        self.enrollment_repo = enrollment_repo
        self.class_repo = class_repo
        self.client_repo = client_repo
        self.locks = locks

    async def create_enrollment(self, data: EnrollmentCreate):
        studio_class = await self.class_repo.find_class(data.class_id)
        if not studio_class:
            raise NotFoundError("Class not found")
        if not await self.client_repo.find_client(data.student_id):
            raise NotFoundError("Student not found")

        async with self.locks.hold("class", data.class_id):
            capacity = studio_class.get("capacity")
            if capacity and await self.enrollment_repo.count_for_class(data.class_id) >= capacity:
                raise ConflictError("Class capacity reached")
            return await self.enrollment_repo.add_enrollment(Enrollment(**data.model_dump()))

    async def get_enrollments(self, class_id: Optional[str] = None, student_id: Optional[str] = None):
        return await self.enrollment_repo.find_enrollments(class_id=class_id, student_id=student_id)

    async def get_enrollment(self, enrollment_id: str):
        enrollment = await self.enrollment_repo.find_enrollment(enrollment_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found")
        return enrollment

    async def update_enrollment(self, enrollment_id: str, data: EnrollmentUpdate):
        update_data = data.model_dump(exclude_unset=True)
        if not update_data:
            return await self.get_enrollment(enrollment_id)
        enrollment = await self.enrollment_repo.update_enrollment(enrollment_id, update_data)
        if not enrollment:
            raise NotFoundError("Enrollment not found")
        return enrollment

    async def delete_enrollment(self, enrollment_id: str):
        if not await self.enrollment_repo.delete_enrollment(enrollment_id):
            raise NotFoundError("Enrollment not found")
        return {"message": "Enrollment deleted"}
