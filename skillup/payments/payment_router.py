"""
Payment endpoints: Razorpay order creation and booking completion
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from skillup.auth.auth_utils import verify_token
from skillup.database import get_db
from skillup.payments import payment_service as service
from skillup.payments.payment_service import get_payment_client

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Payment"], dependencies=[Depends(verify_token)])


# ==================== PYDANTIC MODELS ====================

class PaymentIntentRequest(BaseModel):
    price: Optional[float] = None  # major currency units


class PaymentStudentIn(BaseModel):
    email: EmailStr
    name: Optional[str] = None


class PaymentCreate(BaseModel):
    """Class details are filled in server-side from the path id"""
    model_config = ConfigDict(populate_by_name=True)

    student: PaymentStudentIn
    price: float = Field(..., ge=0)
    transaction_id: Optional[str] = Field(None, alias="transactionId")
    date: Optional[str] = None


# ==================== API ENDPOINTS ====================

@router.post("/create-payment-intent")
async def create_payment_intent(
    data: PaymentIntentRequest,
    client=Depends(get_payment_client)
):
    """
    Create a provider order for the given price and return the token
    the browser checkout needs
    """
    try:
        return await service.create_payment_intent(client, data.price)
    except HTTPException:
        raise
    except Exception:
        logger.exception("Payment intent creation failed")
        raise HTTPException(status_code=500, detail="Internal Server Error")


@router.post("/payments/{class_id}")
async def complete_booking(
    class_id: str,
    data: PaymentCreate,
    db: AsyncIOMotorDatabase = Depends(get_db)
):
    """
    Increment the class enroll count, then store the payment record
    """
    try:
        return await service.record_booking(db, class_id, data.model_dump(by_alias=True, exclude_none=True))
    except HTTPException:
        raise
    except Exception:
        logger.exception("Booking failed for class %s", class_id)
        raise HTTPException(status_code=500, detail="Internal Server Error")
