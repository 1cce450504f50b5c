from abc import ABC, abstractmethod

import httpx
from typing import Any
from shared.models.config import EnvConfig
from shared.models.errors import APIError, TransportError

from shared.helper.HelperConfig import HelperConfig


class ClientInterface(ABC):
    def __init__(self, helper_config: HelperConfig):
        self.logging = helper_config.get_logger()
        self._helper_config = helper_config
        self.timeout = helper_config.get_number_val(f"{self.get_client_type().upper()}_TIMEOUT", default=30.0)

        # client and config
        self._client: httpx.AsyncClient | None = None
        self.validate_full_configuration()

    ##########################################
    ############### CHECKER ##################
    ##########################################

    def validate_full_configuration(self) -> None:
        """
        Validates that all required configuration values for the client are set and valid.

        Raises:
            ValueError: If any required configuration value is missing or invalid.
        """
        req_config = self._get_required_config()
        for config in req_config:
            _ = self.get_config_val(raw_key=config.env_key, default=config.default, val_type=config.val_type)

    ##########################################
    ################ GETTER ##################
    ##########################################

    ################ GENERAL ##################
    def get_client_type(self) -> str:
        """
        Returns the type of the client in lowercase. E.g. "docs"
        """
        return self._get_client_type().lower()

    @abstractmethod
    def _get_client_type(self) -> str:
        """
        Returns the type of the client. E.g. "docs"
        """
        pass

    def get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "quip"
        """
        return self._get_engine_name().lower()

    @abstractmethod
    def _get_engine_name(self) -> str:
        """
        Returns the name of the engine used by the client. E.g. "Quip"
        """
        pass

    ################ CONFIG ##################
    @abstractmethod
    def _get_required_config(self) -> list[EnvConfig]:
        """
        Returns all required configurations for the client.

        Returns:
            list[EnvConfig]: A list containing the details of each required configuration key.
        """
        pass

    def _get_config_key_name(self, raw_key: str) -> str:
        """
        Returns:
            str: The full configuration key name for the client. E.g. "DOCS_QUIP_API_TOKEN"
        """
        key_prefix = f"{self.get_client_type().upper()}_{self.get_engine_name().upper()}"
        return f"{key_prefix}_{raw_key.upper()}"

    def get_config_val(self, raw_key: str, default: Any = None, val_type: str = "string") -> Any:
        """
        Retrieves the value of a configuration key for the client.

        Args:
            raw_key (str): The raw configuration key name
            default (Any): The default value to return if the configuration key is not set
            val_type (str): The type of the configuration value ("string", "number", "bool")
        """
        key = self._get_config_key_name(raw_key)
        if val_type == "string":
            return self._helper_config.get_string_val(key, default=default)
        elif val_type == "number":
            return self._helper_config.get_number_val(key, default=default)
        elif val_type == "bool":
            return self._helper_config.get_bool_val(key, default=default)
        else:
            raise ValueError(f"Unsupported config value type '{val_type}' for env key '{raw_key}' in {self.get_client_type().upper()} client '{self.get_engine_name()}'.")

    ################ AUTH ##################
    @abstractmethod
    def _get_auth_header(self) -> dict:
        """
        Returns the authentication header for the client backend server.

        Returns:
            dict: A dictionary containing the auth data
        """
        pass

    def _get_user_agent(self) -> str:
        """
        Returns the identifying User-Agent sent with every request.
        """
        return "MCP-Quip-Server/1.0"

    ################ ENDPOINTS ##################
    @abstractmethod
    def _get_base_url(self) -> str:
        """
        Returns the base URL of the client backend server

        Returns:
            str: The base URL of the client backend server (e.g. "https://platform.quip.com/1")
        """
        pass

    @abstractmethod
    def _get_endpoint_healthcheck(self) -> str:
        """
        Returns the endpoint path for healthcheck requests.

        Returns:
            str: The endpoint path for healthcheck requests (e.g. "/users/current")
        """
        pass

    ##########################################
    ############### REQUESTS #################
    ##########################################

    async def do_healthcheck(self) -> bytes:
        """Check if the client backend is reachable and accepts the credentials.

        Returns:
            bytes: The raw body of the healthcheck response.

        Raises:
            TransportError: If the backend cannot be reached.
            APIError: If the backend answers with a non-2xx status.
        """
        return await self.send(method="GET", endpoint=self._get_endpoint_healthcheck())

    ##########################################
    ############ CORE REQUESTS ###############
    ##########################################

    async def boot(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialise the HTTP client.

        Args:
            transport: Optional custom transport (e.g. httpx.MockTransport in tests).
        """
        self._client = httpx.AsyncClient(timeout=self.timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client and any other resources."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def send(self, method: str, endpoint: str, json_body: Any = None) -> bytes:
        """Send a request with an optional JSON body.

        Args:
            method: HTTP method (GET, POST, …).
            endpoint: Path (and query string) appended to the base URL.
            json_body: JSON-serialisable body, or None for no body.

        Returns:
            bytes: The raw response body.

        Raises:
            TransportError: On connection, timeout or body-read failure.
            APIError: On a non-2xx response.
        """
        return await self.do_request(
            method=method,
            endpoint=endpoint,
            json=json_body,
            additional_headers={"Content-Type": "application/json"},
        )

    async def send_form(self, method: str, endpoint: str, fields: dict[str, str]) -> bytes:
        """Send a request with an application/x-www-form-urlencoded body.

        Several mutating endpoints of the remote API accept form bodies only.

        Args:
            method: HTTP method (usually POST).
            endpoint: Path appended to the base URL.
            fields: Form fields.

        Returns:
            bytes: The raw response body.

        Raises:
            TransportError: On connection, timeout or body-read failure.
            APIError: On a non-2xx response.
        """
        return await self.do_request(
            method=method,
            endpoint=endpoint,
            data=fields,
            additional_headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

    async def do_request(
        self,
        method: str = "GET",
        endpoint: str = "",
        data: dict[str, str] | None = None,
        json: Any = None,
        additional_headers: dict | None = None,
    ) -> bytes:
        """Send one authenticated HTTP request and return the raw body.

        Exactly one attempt is made; failures are never retried.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE, …).
            endpoint: Path to append to the base URL (leading slash optional).
            data: Form-encoded body.
            json: JSON-serialisable body.
            additional_headers: Extra headers that override the defaults.

        Returns:
            bytes: The raw response body.

        Raises:
            TransportError: If the client is not booted, or the request or body read fails.
            APIError: If the response status is not 2xx. Carries the verbatim body.
        """
        if self._client is None:
            raise TransportError("HTTP client not initialised. Call boot() before making requests.")

        endpoint = "/" + endpoint.strip().lstrip("/") if endpoint.strip() else ""

        headers: dict = {"User-Agent": self._get_user_agent()}
        headers.update(self._get_auth_header())
        if additional_headers:
            headers.update(additional_headers)

        kwargs: dict = {
            "url": f"{self._get_base_url().rstrip('/')}{endpoint}",
            "headers": headers,
            "timeout": self.timeout,
        }

        # add at most one body argument
        if data is not None:
            kwargs["data"] = data
        elif json is not None:
            kwargs["json"] = json

        self.logging.debug("%s %s", method, kwargs["url"])
        try:
            response = await self._client.request(method, **kwargs)
        except httpx.TimeoutException as e:
            raise TransportError(f"Request to {kwargs['url']} timed out: {e}") from e
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {kwargs['url']} failed: {e}") from e

        if not response.is_success:
            self.logging.error(
                "Request to %s failed with status %d: %s",
                kwargs["url"],
                response.status_code,
                response.text,
            )
            raise APIError(status_code=response.status_code, body=response.text)

        return response.content
