# townhub/services/plugin_service.py
import logging
from typing import List

from sqlalchemy.orm import Session

from townhub.models.plugin import Plugin
from townhub.schemas.plugin import PluginCreate
from townhub.services.errors import NotFoundError, ServiceError

logger = logging.getLogger(__name__)


def list_plugins(db: Session) -> List[Plugin]:
    return db.query(Plugin).order_by(Plugin.name).all()


def toggle_plugin(db: Session, *, plugin_id: int) -> Plugin:
    plugin = db.get(Plugin, plugin_id)
    if plugin is None:
        raise NotFoundError("Plugin not found")
    plugin.enabled = not plugin.enabled
    db.commit()
    db.refresh(plugin)
    logger.info("Plugin %s %s", plugin.name, "enabled" if plugin.enabled else "disabled")
    return plugin


def create_plugin(db: Session, *, obj_in: PluginCreate) -> Plugin:
    if db.query(Plugin).filter(Plugin.name == obj_in.name).first():
        raise ServiceError("Plugin with this name already exists")
    plugin = Plugin(**obj_in.model_dump())
    db.add(plugin)
    db.commit()
    db.refresh(plugin)
    return plugin
