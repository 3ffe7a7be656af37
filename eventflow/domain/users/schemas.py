"""User domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.schemas import CamelModel


class RegisterRequest(BaseModel):
    """Profile created right after sign-up with the identity provider"""

    name: str
    role: Literal["client", "vendor"] = "client"

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        if not v or not v.strip():
            raise ValueError("Name is required")
        return v.strip()


class RoleUpdate(BaseModel):
    role: Literal["client", "vendor", "admin"]


class StatusUpdate(BaseModel):
    status: Literal["active", "pending", "disabled"]


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    status: str
    created_at: Optional[datetime] = None
