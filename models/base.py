from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting both snake_case names and the camelCase keys of the JSON data."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
