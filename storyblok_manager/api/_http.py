"""
Base HTTP client for the Storyblok Management API.

Handles the transport, authentication header, configuration checks and
error handling. Each request is a single round trip; nothing is retried.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

from .. import __version__
from ..config import StoryblokConfig, get_config
from ..exceptions import ConfigurationError, RemoteError, TransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Status and raw body of an HTTP response."""

    status_code: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def json(self) -> Any:
        return json.loads(self.body) if self.body else {}


class Transport(ABC):
    """
    Capability for sending one HTTP request.

    Implementations return a TransportResponse for any HTTP status and
    raise TransportError when no response was received.
    """

    @abstractmethod
    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json_data: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """Send the request and return the response."""

    def close(self) -> None:
        pass


class RequestsTransport(Transport):
    """Transport backed by a requests session."""

    def __init__(self, verify_ssl: bool = True):
        self.verify_ssl = verify_ssl
        self._session: Optional[requests.Session] = None
        self._session_lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Get or create the HTTP session."""
        with self._session_lock:
            if self._session is None:
                session = requests.Session()
                session.headers.update({
                    "User-Agent": f"storyblok-manager/{__version__}",
                    "Accept": "application/json",
                })
                self._session = session
            return self._session

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        json_data: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=headers,
                json=json_data,
                data=data,
                files=files,
                timeout=timeout,
                verify=self.verify_ssl,
            )
        except requests.exceptions.ConnectionError as e:
            raise TransportError(f"Connection failed: {e}", cause=e)
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Request timed out: {e}", cause=e)
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request failed: {e}", cause=e)

        return TransportResponse(
            status_code=response.status_code,
            body=response.text,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        with self._session_lock:
            if self._session:
                self._session.close()
                self._session = None


class HTTPClient:
    """
    Base HTTP client for the Management API.

    Handles:
    - Space-scoped URL building
    - The raw-token Authorization header
    - Failing fast on missing configuration
    - Mapping non-2xx responses to RemoteError
    """

    def __init__(
        self,
        config: Optional[StoryblokConfig] = None,
        transport: Optional[Transport] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            config: Optional configuration. Uses global config if not provided.
            transport: Optional transport. Uses a requests session if not provided.
        """
        self.config = config or get_config()
        self.transport = transport or RequestsTransport(verify_ssl=self.config.verify_ssl)

    @property
    def space_url(self) -> str:
        """Base URL of the configured space."""
        return f"{self.config.base_url.rstrip('/')}/spaces/{self.config.space_id}"

    def ensure_configured(self) -> None:
        """Raise ConfigurationError if the space ID or token is missing."""
        missing = self.config.missing_settings()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing,
            )

    def _get_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Get request headers including authentication."""
        # The Management API expects the bare token, no "Bearer" scheme
        headers = {"Authorization": self.config.management_token}
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _handle_response(
        self,
        method: str,
        url: str,
        response: TransportResponse,
    ) -> Dict[str, Any]:
        """Return the parsed body or raise RemoteError."""
        logger.debug("Response: %s %s -> %d", method, url, response.status_code)

        if response.ok:
            if response.status_code == 204 or not response.body:
                return {}
            try:
                data = response.json()
            except ValueError:
                return {"content": response.body}
            return data if isinstance(data, dict) else {"data": data}

        try:
            error_data = response.json()
            if not isinstance(error_data, dict):
                error_data = {"error": error_data}
        except ValueError:
            error_data = {}

        logger.error(
            "API error [%s %s] status=%d body=%s",
            method, url, response.status_code, response.body
        )
        raise RemoteError(
            f"API request failed with status {response.status_code}: "
            f"{self._extract_error_message(error_data, response)}",
            status_code=response.status_code,
            body=response.body,
            response_data=error_data,
        )

    def _extract_error_message(
        self,
        error_data: Dict[str, Any],
        response: TransportResponse
    ) -> str:
        """Extract a readable message from an error response."""
        if "error" in error_data:
            return str(error_data["error"])
        if "message" in error_data:
            return str(error_data["message"])
        if error_data:
            messages = []
            for key, value in error_data.items():
                if isinstance(value, list):
                    value = ", ".join(str(v) for v in value)
                messages.append(f"{key} {value}")
            return "; ".join(messages)
        return response.body or f"HTTP {response.status_code}"

    def request(
        self,
        method: str,
        endpoint: str,
        json_data: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Make an API request.

        Args:
            method: HTTP method
            endpoint: Endpoint relative to the space URL (empty for the space itself)
            json_data: JSON body data
            data: Form fields for multipart upload
            files: Files for multipart upload
            timeout: Per-call timeout override in seconds

        Returns:
            Parsed response data
        """
        self.ensure_configured()

        url = f"{self.space_url}/{endpoint}" if endpoint else self.space_url

        headers = self._get_headers(
            {"Content-Type": "application/json"} if json_data is not None else None
        )

        logger.debug("Request: %s %s", method, url)
        response = self.transport.send(
            method,
            url,
            headers=headers,
            json_data=json_data,
            data=data,
            files=files,
            timeout=timeout if timeout is not None else self.config.timeout,
        )

        return self._handle_response(method, url, response)

    def close(self) -> None:
        """Close the transport."""
        self.transport.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
