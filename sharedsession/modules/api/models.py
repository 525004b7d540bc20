"""
SharedSession data models.

These models define the structure of session values passed between
applications over HTTP.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field


class SessionKeyJsonValue(BaseModel):
    """One named session entry holding a JSON object."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = Field(..., description="Session entry name")
    json_value: Dict[str, Any] = Field(
        ..., alias="jsonValue", description="JSON object stored under the entry"
    )

