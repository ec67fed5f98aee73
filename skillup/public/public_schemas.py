from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from skillup.common.models import Role

# ==================== REQUEST SCHEMAS ====================


class UserCreate(BaseModel):
    email: EmailStr
    username: Optional[str] = None
    name: Optional[str] = None
    image: Optional[str] = None
    phone: Optional[str] = None
    role: Role = Role.STUDENT


class TeacherApplicationCreate(BaseModel):
    """Status is not accepted here; every new application starts pending"""
    email: EmailStr
    name: Optional[str] = None
    image: Optional[str] = None
    title: Optional[str] = None
    category: Optional[str] = None
    experience: Optional[str] = None


class ClassCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    class_title: str = Field(..., alias="classTitle", min_length=1)
    description: Optional[str] = None
    image: Optional[str] = None
    name: Optional[str] = None
    email: EmailStr
    price: float = Field(0, ge=0)
