# townhub/schemas/plugin.py
from pydantic import BaseModel, Field


class PluginCreate(BaseModel):
    name: str = Field(min_length=1)
    route_path: str = Field(pattern=r"^/")
    enabled: bool = True
    icon: str | None = None
    description: str | None = None


class PluginPublic(PluginCreate):
    id: int

    model_config = {"from_attributes": True}
