# townhub/api/v1/endpoints/auth.py
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from townhub.core.security import (
    authenticate_user,
    create_user_token,
    get_current_teacher,
    get_current_user,
)
from townhub.db.session import get_db
from townhub.models.user import STATUS_PENDING, User
from townhub.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PendingRegistration,
    ProfileResponse,
    RegisterRequest,
    TeacherRegisterRequest,
    Token,
    UserPublic,
)
from townhub.schemas.school import SchoolSummary
from townhub.services import school_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _login(db: Session, username: str, password: str, school_id: int | None = None) -> User:
    user = authenticate_user(db, username, password, school_id=school_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if user.status == STATUS_PENDING:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Your account is pending teacher approval",
        )
    return user


@router.get("/schools", response_model=List[SchoolSummary])
def list_schools(db: Session = Depends(get_db)):
    """Schools a student can register with (no login needed)."""
    return school_service.list_active_schools(db)


@router.post(
    "/register",
    response_model=PendingRegistration,
    status_code=status.HTTP_201_CREATED,
)
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    user_service.register_student(db, obj_in=payload)
    return PendingRegistration(
        message="Registration successful. Your teacher must approve your account before you can log in."
    )


@router.post(
    "/register-teacher",
    response_model=UserPublic,
    status_code=status.HTTP_201_CREATED,
)
def register_teacher(
    payload: TeacherRegisterRequest,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    return user_service.create_teacher(
        db, school_id=current_teacher.school_id, obj_in=payload
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = _login(db, payload.username, payload.password, payload.school_id)
    logger.info("User %s logged in (school %s)", user.username, user.school_id)
    return AuthResponse(
        token=create_user_token(user),
        user=user,
        account=user.account,
    )


@router.post("/token", response_model=Token)
def login_for_access_token_form(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """OAuth2 password flow, used by the interactive docs."""
    user = _login(db, form_data.username, form_data.password)
    return Token(access_token=create_user_token(user))


@router.get("/profile", response_model=ProfileResponse)
def profile(current_user: User = Depends(get_current_user)):
    return ProfileResponse(user=current_user, account=current_user.account)
