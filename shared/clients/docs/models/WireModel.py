"""Base model for records decoded from loosely-typed JSON."""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class WireModel(BaseModel):
    """
    Frozen record that accepts wire names (aliases) and Python field names alike.

    JSON null on any field is treated as "not sent" so the field default applies,
    and unknown wire fields are ignored.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data
