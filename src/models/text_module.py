"""Text module models."""

from typing import Optional

from pydantic import BaseModel, field_validator


class TextModule(BaseModel):
    """Reusable snippet inserted into an article body via ``::keyword``."""

    id: str
    name: str
    keywords: str = ""
    content: str
    active: bool = True


class ExpansionRequest(BaseModel):
    """Body being edited plus the text module the user picked."""

    body: str
    module_id: Optional[str] = None
    module_name: Optional[str] = None

    @field_validator("module_name")
    @classmethod
    def strip_name(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value else value
