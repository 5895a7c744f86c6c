from pydantic import ConfigDict, Field, field_validator

from recruiter.schemas import CamelModel, UtcDatetime

DEFAULT_POSITION_STATUS = "Active"


class PositionCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200)
    department: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    status: str = Field(DEFAULT_POSITION_STATUS, min_length=1, max_length=30)

    @field_validator("description", mode="before")
    @classmethod
    def _blank_as_none(cls, value: str | None) -> str | None:
        return value or None


class PositionUpdate(CamelModel):
    title: str | None = Field(None, min_length=1, max_length=200)
    department: str | None = Field(None, min_length=1, max_length=100)
    location: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    status: str | None = Field(None, min_length=1, max_length=30)

    @field_validator("title", "department", "location", "status")
    @classmethod
    def _required_not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("field may be omitted but not null")
        return value


class PositionRead(CamelModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: int
    title: str
    department: str
    location: str
    description: str | None
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime
