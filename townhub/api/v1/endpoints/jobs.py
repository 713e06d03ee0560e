# townhub/api/v1/endpoints/jobs.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from townhub.core.security import (
    get_current_student,
    get_current_teacher,
    get_current_user,
    require_role,
)
from townhub.core.tenancy import get_tenant_id
from townhub.db.session import get_db
from townhub.models.user import ROLE_SUPER_ADMIN, ROLE_TEACHER, User
from townhub.schemas.auth import UserPublic
from townhub.schemas.job import (
    JobApplicationCreate,
    JobApplicationPublic,
    JobApplicationReview,
    JobAssign,
    JobCreate,
    JobPublic,
    JobUpdate,
)
from townhub.services import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])

get_job_manager = require_role(ROLE_TEACHER, ROLE_SUPER_ADMIN)


@router.get("", response_model=List[JobPublic])
@router.get("/", response_model=List[JobPublic], include_in_schema=False)
def list_jobs(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return job_service.list_jobs(db)


@router.post("", response_model=JobPublic, status_code=status.HTTP_201_CREATED)
@router.post(
    "/", response_model=JobPublic, status_code=status.HTTP_201_CREATED, include_in_schema=False
)
def create_job(
    obj_in: JobCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_job_manager),
):
    return job_service.create_job(db, obj_in=obj_in)


# /applications and /assign are declared before /{job_id}


@router.get("/applications", response_model=List[JobApplicationPublic])
def list_applications(
    status: Optional[str] = None,
    job_id: Optional[int] = None,
    user_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    return job_service.list_applications(
        db, school_id=school_id, status=status, job_id=job_id, user_id=user_id
    )


@router.get("/applications/{application_id}", response_model=JobApplicationPublic)
def get_application(
    application_id: int,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    return job_service.get_application(
        db, application_id=application_id, school_id=school_id
    )


@router.put("/applications/{application_id}", response_model=JobApplicationPublic)
def review_application(
    application_id: int,
    obj_in: JobApplicationReview,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    """Approve or deny an application; approval gives the student the job."""
    return job_service.review_application(
        db, application_id=application_id, reviewer=current_teacher, status=obj_in.status
    )


@router.post("/assign", response_model=UserPublic)
def assign_job(
    obj_in: JobAssign,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    return job_service.assign_job(
        db, school_id=school_id, user_id=obj_in.user_id, job_id=obj_in.job_id
    )


@router.delete("/assign/{user_id}")
def unassign_job(
    user_id: int,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
    school_id: int = Depends(get_tenant_id),
):
    job_service.unassign_job(db, school_id=school_id, user_id=user_id)
    return {"message": "Job assignment removed successfully"}


@router.get("/{job_id}", response_model=JobPublic)
def get_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return job_service.get_job(db, job_id)


@router.put("/{job_id}", response_model=JobPublic)
def update_job(
    job_id: int,
    obj_in: JobUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_job_manager),
):
    return job_service.update_job(db, job_id=job_id, obj_in=obj_in)


@router.delete("/{job_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_job(
    job_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_job_manager),
):
    job_service.delete_job(db, job_id=job_id)


@router.post(
    "/{job_id}/apply",
    response_model=JobApplicationPublic,
    status_code=status.HTTP_201_CREATED,
)
def apply_for_job(
    job_id: int,
    obj_in: JobApplicationCreate,
    db: Session = Depends(get_db),
    current_student: User = Depends(get_current_student),
):
    return job_service.apply_for_job(
        db, student=current_student, job_id=job_id, obj_in=obj_in
    )
