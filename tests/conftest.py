"""Shared fixtures: in-memory database, API client and user factories."""
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from townhub.core.security import create_user_token, get_password_hash
from townhub.db.base import Base
from townhub.db.session import get_db
from townhub.main import app
from townhub.models.job import Job
from townhub.models.plugin import Plugin
from townhub.models.school import School
from townhub.models.user import (
    ROLE_STUDENT,
    ROLE_SUPER_ADMIN,
    ROLE_TEACHER,
    STATUS_APPROVED,
    Account,
    User,
)
from townhub.services.economy import DOUBLES_DAY_ROUTE_PATH

TEST_PASSWORD = "secret123"

# hashing is slow; every fixture user shares one hash
_PASSWORD_HASH = get_password_hash(TEST_PASSWORD)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory) -> Session:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_school(db: Session) -> Callable[..., School]:
    def factory(name: str = "Oak Primary", code: str = "oak", **kwargs) -> School:
        school = School(name=name, code=code, **kwargs)
        db.add(school)
        db.commit()
        db.refresh(school)
        return school

    return factory


@pytest.fixture
def make_user(db: Session) -> Callable[..., User]:
    counter = {"n": 0}

    def factory(
        role: str = ROLE_STUDENT,
        school: Optional[School] = None,
        username: Optional[str] = None,
        status: str = STATUS_APPROVED,
        job: Optional[Job] = None,
        balance: float = 0,
        **kwargs,
    ) -> User:
        counter["n"] += 1
        user = User(
            username=username or f"{role}{counter['n']}",
            password_hash=_PASSWORD_HASH,
            role=role,
            status=status,
            school_id=school.id if school else None,
            job_id=job.id if job else None,
            **kwargs,
        )
        if role == ROLE_STUDENT:
            user.account = Account(
                account_number=f"ACC-TEST-{counter['n']}",
                balance=balance,
                school_id=user.school_id,
            )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return factory


@pytest.fixture
def school(make_school) -> School:
    return make_school()


@pytest.fixture
def other_school(make_school) -> School:
    return make_school(name="Elm Academy", code="elm")


@pytest.fixture
def teacher(make_user, school) -> User:
    return make_user(role=ROLE_TEACHER, school=school, username="mrs_smith")


@pytest.fixture
def student(make_user, school) -> User:
    return make_user(role=ROLE_STUDENT, school=school, username="alex", class_name="6A")


@pytest.fixture
def super_admin(make_user) -> User:
    return make_user(role=ROLE_SUPER_ADMIN, username="root")


@pytest.fixture
def make_job(db: Session) -> Callable[..., Job]:
    def factory(name: str = "Software Engineer", salary: float = 6000, **kwargs) -> Job:
        job = Job(name=name, salary=salary, **kwargs)
        db.add(job)
        db.commit()
        db.refresh(job)
        return job

    return factory


@pytest.fixture
def doubles_day(db: Session) -> Plugin:
    plugin = Plugin(
        name="Doubles Day", route_path=DOUBLES_DAY_ROUTE_PATH, enabled=True
    )
    db.add(plugin)
    db.commit()
    db.refresh(plugin)
    return plugin


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    return auth_headers
