from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Represents a single configuration parameter required for a client.

    Attributes:
        env_key (str): The raw key of the setting, prefixed by the client type and engine (e.g. "API_TOKEN" -> "DOCS_QUIP_API_TOKEN").
        val_type (str): The expected type of the value. Supported types are "string", "number" and "bool".
        default (str | int | float | bool | None): An optional default value if the setting is not set. If None, the setting is required and an error will be raised if it is missing.
    """

    env_key: str
    val_type: str
    default: str | int | float | bool | None = None
