from pydantic import ConfigDict, Field

from recruiter.schemas import CamelModel, UtcDatetime


class UserUpsert(CamelModel):
    id: str = Field(..., min_length=1, max_length=255)
    email: str | None = Field(None, max_length=255)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    profile_image_url: str | None = Field(None, max_length=1000)


class UserRead(CamelModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    email: str | None
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    created_at: UtcDatetime
    updated_at: UtcDatetime
