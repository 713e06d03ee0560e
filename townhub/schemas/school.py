# townhub/schemas/school.py
from datetime import datetime

from pydantic import BaseModel, Field


class SchoolBase(BaseModel):
    name: str = Field(min_length=1)
    code: str = Field(min_length=2, max_length=50)


class SchoolCreate(SchoolBase):
    classes: list[str] | None = None


class SchoolSummary(BaseModel):
    id: int
    name: str
    code: str

    model_config = {"from_attributes": True}


class SchoolPublic(SchoolSummary):
    archived: bool
    settings: dict | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}
