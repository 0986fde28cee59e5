from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both camelCase (dashboard forms) and snake_case keys; serializes camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


def blank_to_none(value: Any) -> Any:
    """HTML forms post '' for untouched inputs."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def money_to_text(value: Any) -> Any:
    """Money columns are free text; numbers from JSON are stored as typed."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value
