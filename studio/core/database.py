import logging
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo import ASCENDING
from studio.core.config import MONGODB_URL, DATABASE_NAME

class MongoDB:
    client: AsyncIOMotorClient = None
    db = None

mongodb = MongoDB()

async def connect_to_mongo():
    mongodb.client = AsyncIOMotorClient(MONGODB_URL)
    mongodb.db = mongodb.client[DATABASE_NAME]

    # Test connection
    await mongodb.client.admin.command("ping")
    logging.info("MongoDB connected")

async def close_mongo_connection():
    if mongodb.client:
        mongodb.client.close()
    logging.info("MongoDB disconnected")

async def ensure_indexes():
    db = mongodb.db
    await db.bookings.create_index("id", unique=True)
    await db.bookings.create_index([("service_type", ASCENDING), ("room_id", ASCENDING), ("start_date", ASCENDING)])
    await db.bookings.create_index([("service_type", ASCENDING), ("equipment_id", ASCENDING), ("start_date", ASCENDING)])
    await db.bookings.create_index("class_id")
    await db.bookings.create_index("external_event_ref.event_id")

    # One attendance row per booking participant, and per class session participant
    await db.attendance.create_index(
        [("booking_id", ASCENDING), ("client_id", ASCENDING)],
        unique=True,
        partialFilterExpression={"booking_id": {"$type": "string"}},
    )
    await db.attendance.create_index(
        [("class_id", ASCENDING), ("session_date", ASCENDING), ("client_id", ASCENDING)],
        unique=True,
        partialFilterExpression={"class_id": {"$type": "string"}},
    )
    await db.attendance.create_index("session_date")

    await db.payments.create_index("booking_id")
    await db.payments.create_index("enrollment_id")
    await db.users.create_index("username", unique=True)
