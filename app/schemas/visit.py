"""Pydantic schemas for visit records and HTTP responses.

Field names follow the stored/wire JSON (camelCase) through aliases, so the
Python side stays snake_case.
"""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class VisitRecord(BaseModel):
    """Monthly visit counter for one origin.

    Exactly one record exists per (origin, period). It is rewritten in full
    on every accepted visit.
    """

    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(..., description="Request origin exactly as sent in the Origin header.")
    # Records written before the rename carry the month under "yearMonth"
    period: str = Field(
        ...,
        validation_alias=AliasChoices("period", "yearMonth"),
        pattern=r"^\d{4}-\d{2}$",
        description="Calendar month bucket in YYYY-MM form.",
    )
    visit_count: int = Field(
        0,
        ge=0,
        alias="visitCount",
        description="Accepted visits recorded for the origin in this period.",
    )
    last_visit_date: str | None = Field(
        None,
        alias="lastVisitDate",
        description="ISO-8601 time of the most recent visit; null for a record never written.",
    )

    @classmethod
    def empty(cls, origin: str, period: str) -> "VisitRecord":
        """Record returned when nothing has been stored for (origin, period) yet."""
        return cls(origin=origin, period=period, visit_count=0, last_visit_date=None)

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)


class VisitCountResponse(BaseModel):
    """Success body of the visit-tracking endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    origin: str
    period: str
    visit_count: int = Field(..., alias="visitCount")
    count: int = Field(..., description="Same value as visitCount, kept for older frontends.")
    last_visit_date: str | None = Field(None, alias="lastVisitDate")
    timestamp: str

    @classmethod
    def from_record(
        cls, record: VisitRecord, *, timestamp: str | None = None
    ) -> "VisitCountResponse":
        """Build the body; ``timestamp`` defaults to the instant the visit was recorded."""
        return cls(
            origin=record.origin,
            period=record.period,
            visit_count=record.visit_count,
            count=record.visit_count,
            last_visit_date=record.last_visit_date,
            timestamp=timestamp or record.last_visit_date or "",
        )


class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    timestamp: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response."""

    error: str
    message: str
