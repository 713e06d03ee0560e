# townhub/api/v1/endpoints/plugins.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from townhub.core.security import (
    get_current_super_admin,
    get_current_teacher,
    get_current_user,
)
from townhub.db.session import get_db
from townhub.models.user import User
from townhub.schemas.plugin import PluginCreate, PluginPublic
from townhub.services import plugin_service

router = APIRouter(prefix="/plugins", tags=["plugins"])


@router.get("", response_model=List[PluginPublic])
@router.get("/", response_model=List[PluginPublic], include_in_schema=False)
def list_plugins(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return plugin_service.list_plugins(db)


@router.post("", response_model=PluginPublic, status_code=status.HTTP_201_CREATED)
@router.post(
    "/", response_model=PluginPublic, status_code=status.HTTP_201_CREATED, include_in_schema=False
)
def create_plugin(
    obj_in: PluginCreate,
    db: Session = Depends(get_db),
    current_admin: User = Depends(get_current_super_admin),
):
    return plugin_service.create_plugin(db, obj_in=obj_in)


@router.put("/{plugin_id}/toggle", response_model=PluginPublic)
def toggle_plugin(
    plugin_id: int,
    db: Session = Depends(get_db),
    current_teacher: User = Depends(get_current_teacher),
):
    return plugin_service.toggle_plugin(db, plugin_id=plugin_id)
