from typing import Any

from pydantic import BaseModel as PydanticBaseModel
from pydantic import field_validator


class BaseModel(PydanticBaseModel):
    """Strict model where blank strings count as missing values."""

    @field_validator("*", mode="before")
    @classmethod
    def blank_string_to_none(
        cls,
        value: Any,
    ) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    model_config = {
        "str_strip_whitespace": True,
        "extra": "forbid",
        "validate_assignment": True,
    }
