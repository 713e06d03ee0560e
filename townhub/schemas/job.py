# townhub/schemas/job.py
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


class JobBase(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    salary: float = Field(default=0, ge=0)
    company_name: str | None = None
    location: str | None = None
    requirements: str | None = None


class JobCreate(JobBase):
    pass


class JobUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    salary: float | None = Field(default=None, ge=0)
    company_name: str | None = None
    location: str | None = None
    requirements: str | None = None


class JobPublic(JobBase):
    id: int
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class JobApplicationCreate(BaseModel):
    answers: dict[str, Any]


class JobApplicationReview(BaseModel):
    status: Literal["approved", "denied"]


class JobApplicationPublic(BaseModel):
    id: int
    user_id: int
    job_id: int
    answers: dict[str, Any]
    status: str
    reviewed_by: int | None = None
    reviewed_at: datetime | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class JobAssign(BaseModel):
    user_id: int
    job_id: int
