# townhub/models/school.py
from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String
from sqlalchemy.sql import func

from townhub.db.base import Base

DEFAULT_CLASSES = ["6A", "6B", "6C"]


class School(Base):
    __tablename__ = "schools"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    code = Column(String(50), unique=True, nullable=False, index=True)
    archived = Column(Boolean, nullable=False, default=False)
    # {"classes": [...], "allowed_email_domains": [...]}
    settings = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    @property
    def allowed_classes(self) -> list[str]:
        return (self.settings or {}).get("classes") or DEFAULT_CLASSES
