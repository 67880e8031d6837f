"""
Spaces API - Space lookup used for connectivity checks.
"""

from typing import Optional

from ._http import HTTPClient
from ..models import Space


class SpacesAPI:
    """API for the configured space itself."""

    def __init__(self, http: HTTPClient):
        self._http = http

    def get(self, timeout: Optional[float] = None) -> Space:
        """Fetch the configured space."""
        result = self._http.request("GET", "", timeout=timeout)
        return Space.from_dict(result.get("space", result))
