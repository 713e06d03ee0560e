# townhub/services/school_service.py
from typing import List

from sqlalchemy.orm import Session

from townhub.models.school import DEFAULT_CLASSES, School
from townhub.schemas.school import SchoolCreate
from townhub.services.errors import NotFoundError, ServiceError


def list_active_schools(db: Session) -> List[School]:
    return (
        db.query(School)
        .filter(School.archived.is_(False))
        .order_by(School.name)
        .all()
    )


def list_schools(db: Session) -> List[School]:
    return db.query(School).order_by(School.name).all()


def get_school(db: Session, school_id: int) -> School:
    school = db.get(School, school_id)
    if school is None:
        raise NotFoundError("School not found")
    return school


def create_school(db: Session, *, obj_in: SchoolCreate) -> School:
    code = obj_in.code.strip().lower()
    if db.query(School).filter(School.code == code).first():
        raise ServiceError("School code already exists")

    school = School(
        name=obj_in.name.strip(),
        code=code,
        settings={"classes": obj_in.classes or list(DEFAULT_CLASSES)},
    )
    db.add(school)
    db.commit()
    db.refresh(school)
    return school


def archive_school(db: Session, *, school_id: int) -> School:
    school = get_school(db, school_id)
    school.archived = True
    db.commit()
    db.refresh(school)
    return school
