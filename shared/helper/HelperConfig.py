"""Central configuration helper for the Quip MCP bridge."""

import logging
import os
from typing import Any

# Older names still honoured, checked after the canonical name in the same source.
KEY_ALIASES: dict[str, tuple[str, ...]] = {
    "DOCS_QUIP_API_TOKEN": ("QUIP_API_TOKEN",),
}


class HelperConfig:
    """Central configuration helper.

    Reads all settings from environment variables. Values loaded from the on-disk
    config file are used as a fallback, keyed by the lower-cased variable name
    (e.g. "DOCS_QUIP_API_TOKEN" -> "docs_quip_api_token"). The environment always wins.
    Keys listed in KEY_ALIASES also accept their older names, in env and file alike.
    """

    def __init__(self, logger: logging.Logger, file_values: dict[str, Any] | None = None) -> None:
        self._logger = logger
        self._file_values = {str(k).lower(): v for k, v in (file_values or {}).items()}

    def _read_raw(self, key: str) -> str | None:
        """Resolve a raw value from the environment, then from the config file.

        Args:
            key (str): Upper-cased variable name.

        Returns:
            str | None: The raw value, or None if it is set nowhere (empty string counts as unset).
        """
        names = (key,) + KEY_ALIASES.get(key, ())
        for name in names:
            val = os.getenv(name) or None  # empty string → None
            if val is not None:
                return val
        for name in names:
            file_val = self._file_values.get(name.lower())
            if file_val is not None and str(file_val) != "":
                return str(file_val)
        return None

    def get_string_val(self, key: str, default: str | None = None) -> str:
        """Read a string setting.

        Args:
            key (str): Variable name (case-insensitive).
            default (str | None): Fallback value if the setting is not set.

        Returns:
            str: The resolved value.

        Raises:
            ValueError: If the setting is not set and no default is provided.
        """
        key = key.upper()
        val = self._read_raw(key)
        if val is None and default is None:
            raise ValueError(f"Environment variable '{key}' is not set.")
        return val.strip() if val is not None else default

    def get_number_val(self, key: str, default: float | int | None = None) -> float | int:
        """Read a numeric setting.

        Args:
            key (str): Variable name (case-insensitive).
            default (float | int | None): Fallback value if the setting is not set.

        Returns:
            float | int: The resolved numeric value.

        Raises:
            ValueError: If the setting is not set and no default is provided.
            ValueError: If the value cannot be parsed as a number.
        """
        key = key.upper()
        raw = self._read_raw(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key}' is not set.")
            return default
        try:
            return int(raw) if "." not in raw else float(raw)
        except ValueError:
            raise ValueError(f"Environment variable '{key}' is not a valid number: '{raw}'.")

    def get_bool_val(self, key: str, default: bool | None = None) -> bool:
        """Read a boolean setting.

        Args:
            key (str): Variable name (case-insensitive).
            default (bool | None): Fallback value if the setting is not set.

        Returns:
            bool: The resolved boolean value.

        Raises:
            ValueError: If the setting is not set and no default is provided.
        """
        key = key.upper()
        raw = self._read_raw(key)
        if raw is None:
            if default is None:
                raise ValueError(f"Environment variable '{key}' is not set.")
            return default
        return raw.lower() in ("true", "1", "yes")

    def get_logger(self) -> logging.Logger:
        """Return the application logger.

        Returns:
            logging.Logger: The configured logger instance.
        """
        return self._logger
