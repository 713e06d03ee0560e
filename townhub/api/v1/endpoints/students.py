# townhub/api/v1/endpoints/students.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from townhub.core.security import get_current_teacher
from townhub.core.tenancy import get_tenant_id
from townhub.db.session import get_db
from townhub.models.user import STATUS_PENDING, User
from townhub.schemas.auth import UserPublic
from townhub.services import user_service

router = APIRouter(prefix="/students", tags=["students"])


@router.get("", response_model=List[UserPublic])
@router.get("/", response_model=List[UserPublic], include_in_schema=False)
def list_students(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    return user_service.list_students(db, school_id=school_id, status=status)


@router.get("/pending", response_model=List[UserPublic])
def list_pending(
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    return user_service.list_students(db, school_id=school_id, status=STATUS_PENDING)


@router.put("/{student_id}/approve", response_model=UserPublic)
def approve_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    return user_service.approve_student(db, student_id=student_id, school_id=school_id)


@router.put("/{student_id}/deny")
def deny_student(
    student_id: int,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    user_service.deny_student(db, student_id=student_id, school_id=school_id)
    return {"message": "Student registration denied"}
