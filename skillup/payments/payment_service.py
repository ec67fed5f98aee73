"""
Payment bridge: Razorpay order creation and booking completion.

Booking increments the class enroll counter first and writes the payment
record second. A failed payment insert is compensated by decrementing the
counter again.
"""

import asyncio
import logging
import math
from decimal import Decimal
from typing import Optional

import razorpay
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from skillup import config
from skillup.common.models import Payment
from skillup.database import CLASSES, PAYMENTS, insert_result, parse_object_id

logger = logging.getLogger(__name__)

_razorpay_client = None


def get_payment_client() -> razorpay.Client:
    """Payment provider dependency"""
    global _razorpay_client
    if _razorpay_client is None:
        _razorpay_client = razorpay.Client(auth=(config.RAZORPAY_KEY_ID, config.RAZORPAY_KEY_SECRET))
    return _razorpay_client


def to_minor_units(price: Optional[float]) -> int:
    """Price in major units -> smallest currency unit, rounded up"""
    if price is None:
        raise HTTPException(status_code=400, detail="Price is required")

    if not math.isfinite(price):
        raise HTTPException(status_code=400, detail="Price must be a finite number")

    # decimal string form so 1.1 -> 110, not 111
    amount = math.ceil(Decimal(str(price)) * 100)
    if amount < 1:
        raise HTTPException(status_code=400, detail="Price must be positive")

    return amount

# ==================== PAYMENT INTENT ====================

async def create_payment_intent(client: razorpay.Client, price: Optional[float]) -> dict:
    """
    Razorpay checkout is opened with the order id, so the order id is what
    the browser receives as `clientSecret`.
    """
    amount = to_minor_units(price)

    order_data = {
        "amount": amount,
        "currency": config.PAYMENT_CURRENCY,
        "payment_capture": 1,
    }

    # SDK is blocking (requests)
    order = await asyncio.to_thread(client.order.create, data=order_data)

    return {
        "clientSecret": order["id"],
        "orderId": order["id"],
        "amount": amount,
        "currency": config.PAYMENT_CURRENCY,
        "keyId": config.RAZORPAY_KEY_ID,
    }

# ==================== BOOKING ====================

async def record_booking(db: AsyncIOMotorDatabase, class_id: str, data: dict) -> dict:
    oid = parse_object_id(class_id)
    course_class = await db[CLASSES].find_one({"_id": oid})

    if not course_class:
        raise HTTPException(status_code=404, detail="Class not found")

    payment = Payment(
        **data,
        class_info={"classId": class_id, "classTitle": course_class.get("classTitle")}
    )

    enroll_result = await db[CLASSES].update_one({"_id": oid}, {"$inc": {"enroll": 1}})

    if enroll_result.modified_count != 1:
        logger.error("Enroll increment touched %s documents for class %s", enroll_result.modified_count, class_id)
        raise HTTPException(status_code=500, detail="Failed to update enroll count")

    try:
        result = await db[PAYMENTS].insert_one(payment.to_mongo())
    except Exception:
        logger.error("Payment insert failed for class %s, reverting enroll count", class_id)
        try:
            await db[CLASSES].update_one({"_id": oid}, {"$inc": {"enroll": -1}})
        except Exception:
            logger.exception("Compensation failed: class %s enroll count left incremented", class_id)
        raise

    logger.info("Booking recorded: %s enrolled in %s", payment.student.email, class_id)
    return insert_result(result)
