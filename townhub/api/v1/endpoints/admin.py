# townhub/api/v1/endpoints/admin.py
"""Super-admin endpoints. Queries against one school must name it explicitly."""
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from townhub.core.security import get_current_super_admin
from townhub.core.tenancy import get_target_school_id
from townhub.db.session import get_db
from townhub.models.user import User
from townhub.schemas.auth import UserPublic
from townhub.schemas.school import SchoolCreate, SchoolPublic
from townhub.services import school_service, user_service

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/schools", response_model=List[SchoolPublic])
def list_schools(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_super_admin),
):
    return school_service.list_schools(db)


@router.post("/schools", response_model=SchoolPublic, status_code=status.HTTP_201_CREATED)
def create_school(
    obj_in: SchoolCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_super_admin),
):
    return school_service.create_school(db, obj_in=obj_in)


@router.put("/schools/{school_id}/archive", response_model=SchoolPublic)
def archive_school(
    school_id: int,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_super_admin),
):
    return school_service.archive_school(db, school_id=school_id)


@router.get("/schools/{school_id}/users", response_model=List[UserPublic])
def list_school_users(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_super_admin),
    school_id: int = Depends(get_target_school_id),
):
    school = school_service.get_school(db, school_id)
    return user_service.list_school_users(db, school_id=school.id)


@router.get("/users", response_model=List[UserPublic])
def list_users(
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_super_admin),
    school_id: int = Depends(get_target_school_id),
):
    return user_service.list_school_users(db, school_id=school_id)
