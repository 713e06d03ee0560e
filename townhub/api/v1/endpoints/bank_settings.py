# townhub/api/v1/endpoints/bank_settings.py
from typing import Dict

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from townhub.core.security import get_current_teacher
from townhub.db.session import get_db
from townhub.models.user import User
from townhub.schemas.setting import SettingUpdate, SettingUpdated
from townhub.services import settings_service

router = APIRouter(prefix="/bank-settings", tags=["bank-settings"])


@router.get("", response_model=Dict[str, str])
@router.get("/", response_model=Dict[str, str], include_in_schema=False)
def list_settings(
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    return settings_service.list_settings(db)


@router.put("/{key}", response_model=SettingUpdated)
def update_setting(
    key: str,
    obj_in: SettingUpdate,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    setting = settings_service.update_setting(
        db, key=key, value=obj_in.value, user=current_teacher
    )
    return SettingUpdated(key=setting.setting_key, value=setting.setting_value)
