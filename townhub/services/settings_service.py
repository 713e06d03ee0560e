# townhub/services/settings_service.py
import logging
from typing import Dict

from sqlalchemy.orm import Session

from townhub.models.setting import BankSetting
from townhub.models.user import User
from townhub.services.errors import NotFoundError, ServiceError

logger = logging.getLogger(__name__)

WORDLE_CHORES_ENABLED = "wordle_chores_enabled"
WORDLE_GAME_DAILY_LIMIT = "wordle_game_daily_limit"

# key -> (default value, description)
DEFAULT_SETTINGS = {
    WORDLE_CHORES_ENABLED: ("true", "Whether students can play Wordle chores"),
    WORDLE_GAME_DAILY_LIMIT: ("3", "Wordle games a student can finish per day"),
}


def get_setting(db: Session, key: str) -> str:
    row = db.query(BankSetting).filter(BankSetting.setting_key == key).first()
    if row is None:
        return DEFAULT_SETTINGS[key][0]
    return row.setting_value


def get_bool(db: Session, key: str) -> bool:
    return get_setting(db, key).strip().lower() == "true"


def get_int(db: Session, key: str) -> int:
    value = get_setting(db, key)
    try:
        return int(value)
    except ValueError:
        logger.warning("Setting %s has non-numeric value %r, using default", key, value)
        return int(DEFAULT_SETTINGS[key][0])


def list_settings(db: Session) -> Dict[str, str]:
    values = {key: default for key, (default, _) in DEFAULT_SETTINGS.items()}
    for row in db.query(BankSetting).order_by(BankSetting.setting_key).all():
        values[row.setting_key] = row.setting_value
    return values


def _validate(key: str, value: str) -> str:
    if key == WORDLE_CHORES_ENABLED:
        if value.lower() not in ("true", "false"):
            raise ServiceError(f"{key} must be 'true' or 'false'")
        return value.lower()
    if key == WORDLE_GAME_DAILY_LIMIT:
        try:
            limit = int(value)
        except ValueError:
            raise ServiceError(f"{key} must be a whole number") from None
        if limit < 0:
            raise ServiceError(f"{key} must be a whole number")
        return str(limit)
    return value


def update_setting(db: Session, *, key: str, value: str, user: User) -> BankSetting:
    if key not in DEFAULT_SETTINGS:
        raise NotFoundError("Setting not found")
    value = _validate(key, value.strip())

    row = db.query(BankSetting).filter(BankSetting.setting_key == key).first()
    if row is None:
        row = BankSetting(setting_key=key, description=DEFAULT_SETTINGS[key][1])
        db.add(row)
    row.setting_value = value
    row.updated_by = user.id
    db.commit()
    db.refresh(row)
    logger.info("Setting %s set to %r by %s", key, value, user.username)
    return row
