# townhub/services/job_service.py
import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import Session

from townhub.models.job import Job, JobApplication
from townhub.models.user import User
from townhub.schemas.job import JobApplicationCreate, JobCreate, JobUpdate
from townhub.services.errors import NotFoundError, ServiceError
from townhub.services.user_service import get_student

logger = logging.getLogger(__name__)

APPLICATION_STATUSES = ("pending", "approved", "denied")


def list_jobs(db: Session) -> List[Job]:
    return db.query(Job).order_by(Job.name).all()


def get_job(db: Session, job_id: int) -> Job:
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError("Job not found")
    return job


def _ensure_unique_name(db: Session, name: str, exclude_id: Optional[int] = None) -> None:
    query = db.query(Job).filter(Job.name == name)
    if exclude_id is not None:
        query = query.filter(Job.id != exclude_id)
    if query.first() is not None:
        raise ServiceError("A job with this name already exists")


def create_job(db: Session, *, obj_in: JobCreate) -> Job:
    _ensure_unique_name(db, obj_in.name)
    job = Job(**obj_in.model_dump())
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def update_job(db: Session, *, job_id: int, obj_in: JobUpdate) -> Job:
    job = get_job(db, job_id)
    update_data = obj_in.model_dump(exclude_unset=True)
    if update_data.get("name"):
        _ensure_unique_name(db, update_data["name"], exclude_id=job.id)
    for field, value in update_data.items():
        setattr(job, field, value)
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, *, job_id: int) -> None:
    job = get_job(db, job_id)
    db.query(User).filter(User.job_id == job.id).update(
        {User.job_id: None}, synchronize_session=False
    )
    db.query(JobApplication).filter(JobApplication.job_id == job.id).delete(
        synchronize_session=False
    )
    db.delete(job)
    db.commit()
    logger.info("Deleted job %s (%s)", job.id, job.name)


def apply_for_job(
    db: Session, *, student: User, job_id: int, obj_in: JobApplicationCreate
) -> JobApplication:
    job = get_job(db, job_id)
    existing = (
        db.query(JobApplication)
        .filter(JobApplication.user_id == student.id, JobApplication.job_id == job.id)
        .first()
    )
    if existing is not None:
        raise ServiceError("You have already applied to this job")

    application = JobApplication(
        user_id=student.id, job_id=job.id, answers=obj_in.answers, status="pending"
    )
    db.add(application)
    db.commit()
    db.refresh(application)
    return application


def list_applications(
    db: Session,
    *,
    school_id: int,
    status: Optional[str] = None,
    job_id: Optional[int] = None,
    user_id: Optional[int] = None,
) -> List[JobApplication]:
    """Applications from students of one school, newest first."""
    query = (
        db.query(JobApplication)
        .join(User, JobApplication.user_id == User.id)
        .filter(User.school_id == school_id)
    )
    if status in APPLICATION_STATUSES:
        query = query.filter(JobApplication.status == status)
    if job_id is not None:
        query = query.filter(JobApplication.job_id == job_id)
    if user_id is not None:
        query = query.filter(JobApplication.user_id == user_id)
    return query.order_by(JobApplication.created_at.desc(), JobApplication.id.desc()).all()


def get_application(db: Session, *, application_id: int, school_id: int) -> JobApplication:
    application = (
        db.query(JobApplication)
        .join(User, JobApplication.user_id == User.id)
        .filter(JobApplication.id == application_id, User.school_id == school_id)
        .first()
    )
    if application is None:
        raise NotFoundError("Application not found")
    return application


def review_application(
    db: Session, *, application_id: int, reviewer: User, status: str
) -> JobApplication:
    application = get_application(
        db, application_id=application_id, school_id=reviewer.school_id
    )
    application.status = status
    application.reviewed_by = reviewer.id
    application.reviewed_at = datetime.now(timezone.utc)
    if status == "approved":
        application.applicant.job_id = application.job_id
    db.commit()
    db.refresh(application)
    logger.info(
        "Application %s %s by %s", application.id, status, reviewer.username
    )
    return application


def assign_job(db: Session, *, school_id: int, user_id: int, job_id: int) -> User:
    student = get_student(db, student_id=user_id, school_id=school_id)
    job = get_job(db, job_id)
    student.job_id = job.id
    db.commit()
    db.refresh(student)
    return student


def unassign_job(db: Session, *, school_id: int, user_id: int) -> User:
    student = get_student(db, student_id=user_id, school_id=school_id)
    student.job_id = None
    db.commit()
    db.refresh(student)
    return student