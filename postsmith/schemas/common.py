"""Common schemas used across the application."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON in camelCase; Python attributes and inbound snake_case still accepted."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
