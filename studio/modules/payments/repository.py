from typing import Dict
from pymongo import ReturnDocument
from studio.core.database import mongodb
from studio.modules.payments.models import Payment


class PaymentRepository:
    async def add_payment(self, payment: Payment):
        data = payment.model_dump()
        await mongodb.db.payments.insert_one(dict(data))
        return data

    async def find_payment(self, payment_id: str):
        return await mongodb.db.payments.find_one({"id": payment_id}, {"_id": 0})

    async def find_payments(self, query: dict):
        return await mongodb.db.payments.find(query, {"_id": 0}).sort("date", -1).to_list(1000)

    async def update_payment(self, payment_id: str, update_data: dict):
        return await mongodb.db.payments.find_one_and_update(
            {"id": payment_id},
            {"$set": update_data},
            projection={"_id": 0},
            return_document=ReturnDocument.AFTER
        )

    async def delete_payment(self, payment_id: str) -> bool:
        result = await mongodb.db.payments.delete_one({"id": payment_id})
        return result.deleted_count == 1

    async def sum_by_type(self, match: dict) -> Dict[str, float]:
        """Total amount per payment type over the matching payments."""
        pipeline = [
            {"$match": match},
            {"$group": {"_id": "$type", "total": {"$sum": "$amount"}}},
        ]
        rows = await mongodb.db.payments.aggregate(pipeline).to_list(10)
        totals = {"income": 0.0, "expense": 0.0}
        for row in rows:
            if row["_id"] in totals:
                totals[row["_id"]] = float(row["total"] or 0)
        return totals
