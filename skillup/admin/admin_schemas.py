from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from skillup.common.models import ApplicationStatus, Role

# ==================== REQUEST SCHEMAS ====================


class UserUpdate(BaseModel):
    """Fields an admin may set on a user; email comes from the path"""
    username: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[Role] = None


class ApplicationStatusUpdate(BaseModel):
    status: ApplicationStatus


class ClassStatusUpdate(BaseModel):
    status: ApplicationStatus


class ClassPatch(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_title: Optional[str] = Field(None, alias="classTitle", min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)


class ClassUpdateRequest(BaseModel):
    """
    Wire shape is {"updateData": {...}}; only ClassPatch fields survive
    """
    model_config = ConfigDict(populate_by_name=True)

    update_data: ClassPatch = Field(..., alias="updateData")
