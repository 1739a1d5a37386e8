"""
Parcel Pydantic schemas.

Defines the in-memory parcel representations handed to and returned by
the parcel store.
"""

import re
from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator
from tracker.app.models.parcel_enums import ParcelStatus

RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# RFC 3339 section 5.6 date-time; "T" and "Z" are case-insensitive
RFC3339_PATTERN = re.compile(
    r"(?P<date>\d{4}-\d{2}-\d{2})[Tt]"
    r"(?P<time>\d{2}:\d{2}:\d{2})(?:\.\d+)?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
)


def rfc3339_now() -> str:
    """Current UTC time formatted as RFC3339 with second precision."""
    return datetime.now(timezone.utc).strftime(RFC3339_FORMAT)


class ParcelBase(BaseModel):
    """Fields shared by new and stored parcels."""
    client: int = Field(..., description="Identifier of the registering client")
    status: ParcelStatus = Field(default=ParcelStatus.REGISTERED, description="Workflow stage")
    address: str = Field(..., min_length=1, description="Delivery address")
    created_at: str = Field(default_factory=rfc3339_now, description="RFC3339 creation timestamp")

    @field_validator("created_at")
    @classmethod
    def check_rfc3339(cls, value: str) -> str:
        # Stored verbatim; only the format is checked
        match = RFC3339_PATTERN.fullmatch(value)
        if match is None:
            raise ValueError(f"created_at is not an RFC3339 timestamp: {value!r}")
        offset = match.group("offset")
        if offset in ("Z", "z"):
            offset = "+00:00"
        try:
            datetime.fromisoformat(f"{match.group('date')}T{match.group('time')}{offset}")
        except ValueError as exc:
            raise ValueError(f"created_at is not a valid date and time: {value!r}") from exc
        return value


class ParcelCreate(ParcelBase):
    """Schema for a parcel that has not been stored yet."""


class ParcelAddressUpdate(BaseModel):
    """Schema for a new delivery address."""
    address: str = Field(..., min_length=1, description="Delivery address")


class ParcelResponse(ParcelBase):
    """Schema for a stored parcel."""
    number: int

    class Config:
        from_attributes = True
