from pydantic import BaseModel, Field


class SettingUpdate(BaseModel):
    value: str = Field(min_length=1)


class SettingUpdated(BaseModel):
    message: str = "Setting updated successfully"
    key: str
    value: str
