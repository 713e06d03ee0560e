# townhub/core/security.py
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from townhub.core.config import settings
from townhub.db.session import get_db
from townhub.models.user import ROLE_STUDENT, ROLE_SUPER_ADMIN, ROLE_TEACHER, User

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/token")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(plain_password, password_hash)
    except ValueError:
        # malformed hash stored for the user
        return False


def create_access_token(
    data: dict[str, Any], expires_delta: timedelta | None = None
) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode["exp"] = expire
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_user_token(user: User) -> str:
    """Token carrying the identity and its tenant: {sub, school_id, role}."""
    return create_access_token(
        {"sub": str(user.id), "school_id": user.school_id, "role": user.role}
    )


def authenticate_user(
    db: Session, username: str, password: str, school_id: int | None = None
) -> User | None:
    query = db.query(User).filter(User.username == username)
    if school_id is not None:
        query = query.filter(User.school_id == school_id)
    for user in query.order_by(User.id).all():
        if verify_password(password, user.password_hash):
            return user
    return None


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM]
        )
        user_id = int(payload["sub"])
    except (JWTError, KeyError, TypeError, ValueError) as exc:
        logger.info("Token verification failed: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = db.get(User, user_id)
    if user is None:
        logger.info("User not found for token subject %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if user.role != ROLE_SUPER_ADMIN and user.school_id != payload.get("school_id"):
        logger.warning("School id mismatch for user %s", user.id)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid token - school context mismatch",
        )
    return user


def require_role(*roles: str) -> Callable[..., User]:
    def checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return checker


get_current_teacher = require_role(ROLE_TEACHER)
get_current_student = require_role(ROLE_STUDENT)
get_current_super_admin = require_role(ROLE_SUPER_ADMIN)
