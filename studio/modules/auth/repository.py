from studio.core.database import mongodb
from studio.modules.auth.models import User


class AuthRepository:
    async def user_exists(self, username: str) -> bool:
        return await mongodb.db.users.find_one({"username": username}) is not None

    async def create_user(self, user: User) -> dict:
        data = user.model_dump()
        await mongodb.db.users.insert_one(dict(data))
        return data

    async def find_user(self, username: str) -> dict:
        return await mongodb.db.users.find_one({"username": username}, {"_id": 0})

    async def find_user_by_id(self, id: str) -> dict:
        return await mongodb.db.users.find_one({"id": id}, {"_id": 0, "hashed_password": 0})
