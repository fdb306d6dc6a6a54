"""RSVP response models.

This module defines the ResponseRecord stored for every guest reply, the
RSVPSubmission payload accepted by the ingestion endpoint, and the
StoreResult value returned by every response store operation.
"""

from dataclasses import dataclass, field
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class RSVPValidationError(ValueError):
    """Raised when a submission lacks a required field."""


class ResponseRecord(BaseModel):
    """One guest's RSVP reply.

    Records are created once at submission time and appended to exactly one
    store. They are never updated or deleted afterwards.

    Attributes:
        name: Guest name as typed on the invitation page.
        attendance: Attendance choice, e.g. "attending" or "not attending".
        message: Optional wish or note for the couple.
        timestamp: Server time of the submission, formatted for display.
    """
    model_config = ConfigDict(frozen=True)

    name: str = ""
    attendance: str = ""
    message: str = ""
    timestamp: str = ""

    def as_row(self) -> list[str]:
        """Spreadsheet row in column order A:D."""
        return [self.name, self.attendance, self.message, self.timestamp]


class RSVPSubmission(BaseModel):
    """Payload posted by the RSVP form. Unknown keys are ignored."""
    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    attendance: str | None = None
    message: str | None = None

    def to_record(self, now: datetime, timestamp_format: str) -> ResponseRecord:
        """Build the record to store, rejecting incomplete submissions."""
        if not self.name or not self.name.strip():
            raise RSVPValidationError("Name and attendance are required")
        if not self.attendance or not self.attendance.strip():
            raise RSVPValidationError("Name and attendance are required")

        return ResponseRecord(
            name=self.name,
            attendance=self.attendance,
            message=self.message or "",
            timestamp=now.strftime(timestamp_format),
        )


@dataclass(frozen=True)
class StoreResult:
    """Outcome of a store operation.

    Stores report remote failures through this value instead of raising, so
    callers decide on fallback explicitly.
    """
    ok: bool
    records: list[ResponseRecord] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def success(cls, records: list[ResponseRecord] | None = None) -> "StoreResult":
        return cls(ok=True, records=list(records or []))

    @classmethod
    def failure(cls, error: str) -> "StoreResult":
        return cls(ok=False, error=error)
