"""Common schema base - camelCase on the wire, snake_case in Python."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both `eventId` and `event_id`; serializes as camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
