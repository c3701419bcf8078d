"""
Shared model configuration: snake_case attributes, camelCase JSON keys.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self) -> dict:
        """Serialise with the camelCase keys downstream tools expect."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
