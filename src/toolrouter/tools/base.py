"""Shared pydantic base for tool payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase JSON from the services and snake_case from Python."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


NOT_CONFIGURED_ERROR = "{service} service is not configured"
