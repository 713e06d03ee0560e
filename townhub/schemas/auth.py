# townhub/schemas/auth.py
from datetime import datetime

from pydantic import (
    AliasChoices,
    BaseModel,
    EmailStr,
    Field,
    field_validator,
    model_validator,
)

from townhub.models.user import ROLE_STUDENT, ROLE_TEACHER


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)
    school_id: int | None = None


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3)
    password: str = Field(min_length=6)
    confirm_password: str = Field(
        validation_alias=AliasChoices("confirm_password", "confirmPassword")
    )
    role: str = ROLE_STUDENT
    school_id: int
    first_name: str | None = None
    last_name: str | None = None
    class_name: str | None = Field(
        default=None, validation_alias=AliasChoices("class", "class_name")
    )
    email: EmailStr | None = None

    @field_validator("username")
    @classmethod
    def no_spaces(cls, v: str) -> str:
        if " " in v:
            raise ValueError("Username cannot contain spaces")
        return v

    @field_validator("role")
    @classmethod
    def student_only(cls, v: str) -> str:
        # teachers are created through /register-teacher
        if v == ROLE_TEACHER:
            raise ValueError("Teacher registration requires admin authorization")
        if v != ROLE_STUDENT:
            raise ValueError("Invalid role")
        return v

    @field_validator("first_name", "last_name", "class_name", "email", mode="before")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str):
            return v.strip() or None
        return v

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class TeacherRegisterRequest(BaseModel):
    username: str = Field(min_length=3)
    password: str = Field(min_length=6)
    first_name: str | None = None
    last_name: str | None = None
    email: EmailStr | None = None


class UserPublic(BaseModel):
    id: int
    username: str
    role: str
    first_name: str | None = None
    last_name: str | None = None
    class_name: str | None = Field(
        default=None,
        validation_alias=AliasChoices("class", "class_name"),
        serialization_alias="class",
    )
    email: str | None = None
    status: str
    school_id: int | None = None
    job_id: int | None = None
    job_level: int = 1
    job_experience_points: int = 0
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class AccountPublic(BaseModel):
    id: int
    user_id: int
    account_number: str
    balance: float

    model_config = {"from_attributes": True}


class AuthResponse(BaseModel):
    token: str
    user: UserPublic
    account: AccountPublic | None = None


class PendingRegistration(BaseModel):
    message: str
    requires_approval: bool = True


class ProfileResponse(BaseModel):
    user: UserPublic
    account: AccountPublic | None = None
