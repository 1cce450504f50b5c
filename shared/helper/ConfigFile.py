"""On-disk configuration file for the Quip MCP bridge (YAML, JSON accepted on read)."""

import json
import os
from pathlib import Path
from typing import Any

import yaml

APP_DIR_NAME = "quip-mcp"
CONFIG_FILE_NAME = "config.yaml"
TOKEN_KEY = "docs_quip_api_token"
LEGACY_TOKEN_KEY = "quip_api_token"
MIN_TOKEN_LENGTH = 10


def get_default_config_path() -> Path:
    """Return the config file location.

    Uses $XDG_CONFIG_HOME when set, otherwise ~/.config. Falls back to a dot file in
    the current directory if the home directory cannot be resolved.
    """
    xdg_config = os.getenv("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_DIR_NAME / CONFIG_FILE_NAME
    try:
        home = Path.home()
    except RuntimeError:
        return Path(f".{APP_DIR_NAME}-{CONFIG_FILE_NAME}")
    return home / ".config" / APP_DIR_NAME / CONFIG_FILE_NAME


def validate_token(token: str | None) -> str:
    """Check that a token is non-empty and long enough to be plausible.

    Args:
        token (str | None): The raw token.

    Returns:
        str: The stripped token.

    Raises:
        ValueError: If the token is empty or shorter than MIN_TOKEN_LENGTH.
    """
    token = (token or "").strip()
    if not token:
        raise ValueError("Token cannot be empty.")
    if len(token) < MIN_TOKEN_LENGTH:
        raise ValueError("Token appears to be too short, please check and try again.")
    return token


class ConfigFile:
    """Loads and saves the persisted configuration values."""

    def __init__(self, path: Path | str | None = None) -> None:
        self._path = Path(path) if path else get_default_config_path()

    def get_path(self) -> Path:
        return self._path

    def load(self) -> dict[str, Any]:
        """Load the config file.

        Returns:
            dict[str, Any]: The stored values, or an empty dict if the file does not exist.

        Raises:
            ValueError: If the file is neither valid YAML nor valid JSON, or is not a mapping.
        """
        if not self._path.exists():
            return {}
        raw = self._path.read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as yaml_error:
            try:
                data = json.loads(raw)
            except ValueError:
                raise ValueError(f"Failed to parse config file '{self._path}' as YAML or JSON: {yaml_error}")
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file '{self._path}' must contain a mapping, got {type(data).__name__}.")
        return data

    def save(self, values: dict[str, Any]) -> None:
        """Write values to the config file, readable by the current user only.

        The file is created with mode 0600, and an existing file is narrowed to 0600
        before anything is written to it.
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        if hasattr(os, "fchmod"):
            os.fchmod(fd, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yaml.safe_dump(values, f, default_flow_style=False)

    def get_token(self) -> str | None:
        """Return the stored token, accepting the older "quip_api_token" key as well."""
        values = self.load()
        for key in (TOKEN_KEY, LEGACY_TOKEN_KEY):
            if values.get(key):
                return str(values[key])
        return None

    def save_token(self, token: str) -> None:
        """Validate and persist the API token, keeping any other stored values.

        A token stored under the older key is replaced, not kept alongside.
        """
        values = self.load()
        values.pop(LEGACY_TOKEN_KEY, None)
        values[TOKEN_KEY] = validate_token(token)
        self.save(values)

    def has_valid_token(self) -> bool:
        try:
            validate_token(self.get_token())
        except ValueError:
            return False
        return True
