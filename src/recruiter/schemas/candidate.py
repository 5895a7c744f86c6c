from enum import StrEnum
from typing import Annotated

from pydantic import AfterValidator, ConfigDict, Field, field_validator, validate_email

from recruiter.schemas import CamelModel, UtcDatetime


def _check_email(value: str) -> str:
    # Validate the address but store it exactly as submitted
    if "<" in value:
        raise ValueError("value is not a valid email address: display names are not allowed")
    validate_email(value)
    return value


SubmittedEmail = Annotated[str, AfterValidator(_check_email)]

# Positions live in an int4 serial column
MAX_POSITION_ID = 2**31 - 1


class CandidateStatus(StrEnum):
    NEW = "New"
    IN_REVIEW = "In Review"
    SHORTLISTED = "Shortlisted"
    REJECTED = "Rejected"


class CandidateCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: SubmittedEmail
    phone: str = Field(..., min_length=1, max_length=50)
    resume: str | None = Field(None, max_length=1000)
    position_applied: str = Field(..., min_length=1, max_length=200)
    status: CandidateStatus = CandidateStatus.NEW
    position_id: int | None = Field(None, ge=1, le=MAX_POSITION_ID)

    @field_validator("resume", "position_id", mode="before")
    @classmethod
    def _blank_as_none(cls, value):
        return value or None


class CandidateUpdate(CamelModel):
    name: str | None = Field(None, min_length=1, max_length=200)
    email: SubmittedEmail | None = None
    phone: str | None = Field(None, min_length=1, max_length=50)
    resume: str | None = Field(None, max_length=1000)
    position_applied: str | None = Field(None, min_length=1, max_length=200)
    status: CandidateStatus | None = None
    position_id: int | None = Field(None, ge=1, le=MAX_POSITION_ID)

    @field_validator("name", "email", "phone", "position_applied", "status")
    @classmethod
    def _required_not_null(cls, value):
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value


class CandidateRead(CamelModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    name: str
    email: str
    phone: str
    resume: str | None
    position_applied: str
    status: str
    position_id: int | None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class CandidateFilters(CamelModel):
    """Conjunctive filters for candidate listings.

    ``position`` and ``status`` are exact matches; ``search`` is a
    case-insensitive substring match against the name or the email.
    Empty strings impose no constraint.
    """

    position: str | None = None
    status: str | None = None
    search: str | None = None

    @field_validator("position", "status", "search")
    @classmethod
    def _empty_as_absent(cls, value: str | None) -> str | None:
        return value or None

    def matches(self, candidate: CandidateRead) -> bool:
        if self.position and candidate.position_applied != self.position:
            return False
        if self.status and candidate.status != self.status:
            return False
        if self.search:
            needle = self.search.lower()
            if needle not in candidate.name.lower() and needle not in candidate.email.lower():
                return False
        return True
