"""Task domain schemas"""

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, field_validator

from ...shared.schemas import CamelModel
from ...shared.validators import validate_category


class AssignmentRequest(BaseModel):
    vendorId: str
    category: str

    @field_validator("category")
    @classmethod
    def check_category(cls, v):
        return validate_category(v)


class TaskStatusUpdate(BaseModel):
    status: Literal["assigned", "in-progress", "completed"]


class TaskResponse(CamelModel):
    id: str
    booking_id: str
    vendor_id: str
    vendor_name: str
    category: str
    title: str
    description: Optional[str] = None
    status: str
    event_date: date
    client_requirements: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TaskStatsResponse(CamelModel):
    total: int = 0
    assigned: int = 0
    in_progress: int = 0
    completed: int = 0
