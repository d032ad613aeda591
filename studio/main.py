import logging
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from studio.core.config import LOG_LEVEL
from studio.core.database import close_mongo_connection, connect_to_mongo, ensure_indexes
from studio.modules.attendance.router import attendance_router
from studio.modules.auth.router import auth_router
from studio.modules.booking.router import booking_router
from studio.modules.calendar.router import calendar_router
from studio.modules.catalog.router import catalog_router
from studio.modules.classes.router import class_router
from studio.modules.clients.router import client_router
from studio.modules.dashboard.router import dashboard_router
from studio.modules.enrollments.router import enrollment_router
from studio.modules.equipment.router import equipment_router
from studio.modules.payments.router import payment_router
from studio.modules.rooms.router import room_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    await connect_to_mongo()
    await ensure_indexes()
    yield
    # Shutdown
    await close_mongo_connection()


app = FastAPI(title="Studio API", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"detail": {"message": "Invalid request", "errors": errors}})
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logging.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"detail": "Something went wrong"})


@app.get("/")
async def root():
    return {"message": "Studio API"}


app.include_router(auth_router, prefix="/api")
app.include_router(catalog_router, prefix="/api")
app.include_router(client_router, prefix="/api")
app.include_router(room_router, prefix="/api")
app.include_router(equipment_router, prefix="/api")
app.include_router(class_router, prefix="/api")
app.include_router(enrollment_router, prefix="/api")
app.include_router(booking_router, prefix="/api")
app.include_router(attendance_router, prefix="/api")
app.include_router(payment_router, prefix="/api")
app.include_router(calendar_router, prefix="/api")
app.include_router(dashboard_router, prefix="/api")
