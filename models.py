"""
Pydantic models for fleet records and API responses
Truck / Load rows as read from the fleet store (read-only snapshot)
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TruckStatus(str, Enum):
    """Truck operational status"""

    ACTIVE = "ACTIVE"
    IN_SHOP = "IN_SHOP"
    INACTIVE = "INACTIVE"
    RETIRED = "RETIRED"


class TruckRecord(BaseModel):
    """A truck as seen by the utilization engine"""

    id: str
    status: TruckStatus = TruckStatus.ACTIVE
    unit_number: Optional[str] = None

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {"id": "trk_01", "status": "ACTIVE", "unit_number": "101"}
        },
    )


class LoadRecord(BaseModel):
    """
    A load assignment.

    Dates are calendar dates; datetimes coming from the database are
    truncated so a day is counted once regardless of time of day.
    """

    id: Optional[str] = None
    truck_id: Optional[str] = None
    pickup_date: date
    delivery_date: Optional[date] = None  # None = still in progress
    is_soft_deleted: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("pickup_date", "delivery_date", mode="before")
    @classmethod
    def _truncate_datetime(cls, value):
        if isinstance(value, datetime):
            return value.date()
        return value


class HealthCheck(BaseModel):
    """Service health response"""

    status: str = Field(default="ok")
    version: str
    timestamp: datetime
