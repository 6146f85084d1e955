from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class MessageResponse(BaseModel):
    """Acknowledgement for operations without a resource body."""
    message: str = Field(..., description="Outcome description")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional details")


class UploadResponse(BaseModel):
    url: str
