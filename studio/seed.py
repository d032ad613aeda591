"""Create the initial admin user: python -m studio.seed"""
import asyncio
import logging
import os
from studio.core.database import close_mongo_connection, connect_to_mongo
from studio.modules.auth.models import User, UserRole
from studio.modules.auth.repository import AuthRepository
from studio.modules.auth.utility import hash_password


async def seed():
    await connect_to_mongo()
    try:
        repo = AuthRepository()
        username = os.getenv("SEED_ADMIN_USERNAME", "admin")
        if await repo.user_exists(username):
            logging.info(f"Admin user already exists: {username}")
            return
        password = os.getenv("SEED_ADMIN_PASSWORD", "password123")
        await repo.create_user(User(username=username, hashed_password=hash_password(password), role=UserRole.admin))
        logging.info(f"Created admin user: {username}")
    finally:
        await close_mongo_connection()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed())
