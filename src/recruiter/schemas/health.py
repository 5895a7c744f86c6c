from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    storage: str
    version: str


class StatusResponse(BaseModel):
    status: str
