"""API Pydantic schemas for talk data and schedule responses"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class Talk(BaseModel):
    """One scheduled presentation as stored in the talk data file"""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    title: str
    speakers: tuple[str, ...] = ()
    description: str = ""
    categories: tuple[str, ...] = ()


class ScheduleEntryResponse(BaseModel):
    """A laid-out schedule entry with its rendered node"""

    kind: str
    label: str
    talk_id: str | None = None
    start: datetime
    end: datetime
    time_range: str
    html: str
    visible: bool = True


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(default="healthy")
    talks_file_readable: bool = False
    version: str = Field(default="0.1.0")


class ErrorResponse(BaseModel):
    """Error response body"""

    error: str
