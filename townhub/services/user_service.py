# townhub/services/user_service.py
import logging
import secrets
import time
from typing import List, Optional

from sqlalchemy.orm import Session

from townhub.core.security import get_password_hash
from townhub.models.school import School
from townhub.models.user import (
    ROLE_STUDENT,
    ROLE_SUPER_ADMIN,
    ROLE_TEACHER,
    STATUS_APPROVED,
    STATUS_PENDING,
    Account,
    User,
)
from townhub.schemas.auth import RegisterRequest, TeacherRegisterRequest
from townhub.services.errors import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


def generate_account_number() -> str:
    return f"ACC{int(time.time() * 1000)}{secrets.randbelow(1000):03d}"


def username_taken(db: Session, *, username: str, school_id: Optional[int]) -> bool:
    return (
        db.query(User)
        .filter(User.username == username, User.school_id == school_id)
        .first()
        is not None
    )


def get_active_school(db: Session, school_id: int) -> School:
    school = db.get(School, school_id)
    if school is None or school.archived:
        raise ServiceError("Invalid or inactive school")
    return school


def register_student(db: Session, *, obj_in: RegisterRequest) -> User:
    """
    Self-registration: the student starts pending with an empty bank account
    and cannot log in until a teacher of the school approves them.
    """
    school = get_active_school(db, obj_in.school_id)
    if obj_in.class_name and obj_in.class_name not in school.allowed_classes:
        raise ServiceError(
            f"Class must be one of: {', '.join(school.allowed_classes)}"
        )
    if username_taken(db, username=obj_in.username, school_id=school.id):
        raise ServiceError("Username already exists")

    user = User(
        username=obj_in.username,
        password_hash=get_password_hash(obj_in.password),
        role=ROLE_STUDENT,
        first_name=obj_in.first_name,
        last_name=obj_in.last_name,
        class_name=obj_in.class_name,
        email=obj_in.email,
        status=STATUS_PENDING,
        school_id=school.id,
    )
    user.account = Account(
        account_number=generate_account_number(),
        balance=0,
        school_id=school.id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered pending student %s in school %s", user.username, school.id)
    return user


def create_teacher(db: Session, *, school_id: int, obj_in: TeacherRegisterRequest) -> User:
    if not school_id:
        raise ServiceError("Teachers must belong to a school")
    if username_taken(db, username=obj_in.username, school_id=school_id):
        raise ServiceError("Username already exists")

    user = User(
        username=obj_in.username,
        password_hash=get_password_hash(obj_in.password),
        role=ROLE_TEACHER,
        first_name=obj_in.first_name,
        last_name=obj_in.last_name,
        email=obj_in.email,
        status=STATUS_APPROVED,
        school_id=school_id,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def list_students(
    db: Session, *, school_id: int, status: Optional[str] = None
) -> List[User]:
    query = db.query(User).filter(User.role == ROLE_STUDENT, User.school_id == school_id)
    if status:
        query = query.filter(User.status == status)
    return query.order_by(User.class_name, User.last_name, User.first_name, User.id).all()


def list_school_users(db: Session, *, school_id: int) -> List[User]:
    return (
        db.query(User)
        .filter(User.school_id == school_id, User.role != ROLE_SUPER_ADMIN)
        .order_by(User.role, User.username)
        .all()
    )


def get_student(db: Session, *, student_id: int, school_id: int) -> User:
    student = (
        db.query(User)
        .filter(
            User.id == student_id,
            User.role == ROLE_STUDENT,
            User.school_id == school_id,
        )
        .first()
    )
    if student is None:
        raise NotFoundError("Student not found")
    return student


def _get_pending(db: Session, *, student_id: int, school_id: int) -> User:
    student = get_student(db, student_id=student_id, school_id=school_id)
    if student.status != STATUS_PENDING:
        raise ServiceError(f"Student is already {student.status}")
    return student


def approve_student(db: Session, *, student_id: int, school_id: int) -> User:
    student = _get_pending(db, student_id=student_id, school_id=school_id)
    student.status = STATUS_APPROVED
    db.commit()
    db.refresh(student)
    logger.info("Approved student %s", student.username)
    return student


def deny_student(db: Session, *, student_id: int, school_id: int) -> None:
    """A denied registration is removed together with its account."""
    student = _get_pending(db, student_id=student_id, school_id=school_id)
    db.delete(student)
    db.commit()
    logger.info("Denied and removed pending student %s", student.username)


def create_or_promote_super_admin(db: Session, *, username: str, password: str) -> User:
    """Create the user as a school-less super admin, or promote an existing one."""
    user = (
        db.query(User)
        .filter(User.username == username)
        .order_by(User.school_id.is_(None).desc(), User.id)
        .first()
    )
    if user is None:
        user = User(username=username, role=ROLE_SUPER_ADMIN)
        db.add(user)
    user.password_hash = get_password_hash(password)
    user.role = ROLE_SUPER_ADMIN
    user.status = STATUS_APPROVED
    user.school_id = None
    db.commit()
    db.refresh(user)
    return user
