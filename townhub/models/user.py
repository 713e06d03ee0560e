# townhub/models/user.py
from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from townhub.db.base import Base

ROLE_STUDENT = "student"
ROLE_TEACHER = "teacher"
ROLE_SUPER_ADMIN = "super_admin"

STATUS_APPROVED = "approved"
STATUS_PENDING = "pending"


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("school_id", "username", name="uq_users_school_username"),
    )

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # student / teacher / super_admin

    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    class_name = Column("class", String(10), nullable=True)
    email = Column(String(255), nullable=True)

    status = Column(String(20), nullable=False, default=STATUS_APPROVED, index=True)
    # NULL only for super admins
    school_id = Column(
        Integer, ForeignKey("schools.id", ondelete="CASCADE"), nullable=True, index=True
    )

    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="SET NULL"), nullable=True)
    job_level = Column(Integer, nullable=False, default=1)
    job_experience_points = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    account = relationship(
        "Account", uselist=False, cascade="all, delete-orphan", back_populates="user"
    )
    job = relationship("Job")
    applications = relationship(
        "JobApplication",
        cascade="all, delete-orphan",
        foreign_keys="JobApplication.user_id",
    )

    @property
    def is_super_admin(self) -> bool:
        return self.role == ROLE_SUPER_ADMIN

    @property
    def job_name(self) -> str | None:
        return self.job.name if self.job is not None else None


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    account_number = Column(String(50), unique=True, nullable=False)
    balance = Column(Numeric(10, 2), nullable=False, default=0)
    school_id = Column(Integer, ForeignKey("schools.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    user = relationship("User", back_populates="account")


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    from_account_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=True
    )
    to_account_id = Column(
        Integer, ForeignKey("accounts.id", ondelete="CASCADE"), nullable=True
    )
    amount = Column(Numeric(10, 2), nullable=False)
    transaction_type = Column(String(30), nullable=False)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
