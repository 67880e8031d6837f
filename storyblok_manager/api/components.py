"""
Components API - Component schema management.
"""

from typing import Optional, Dict, Any, List

from ._http import HTTPClient
from ..exceptions import ValidationError
from ..models import Component


class ComponentsAPI:
    """
    API for component (content-block schema) operations.

    Handles:
    - Component creation
    - Component listing
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Components API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def create(
        self,
        name: str,
        display_name: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None,
        preview_tmpl: Optional[str] = None,
        is_root: bool = False,
        timeout: Optional[float] = None
    ) -> Component:
        """
        Create a component.

        Args:
            name: Technical name, unique within the space
            display_name: Human-readable name (defaults to name)
            schema: Mapping of field name to field definition
            preview_tmpl: Optional preview template
            is_root: Whether the component can be used as a content type
            timeout: Per-call timeout override in seconds

        Returns:
            The component as created by the server
        """
        if not name:
            raise ValidationError("Component name is required")

        component = Component(
            name=name,
            display_name=display_name,
            schema=schema or {},
            preview_tmpl=preview_tmpl,
            is_root=is_root,
        )
        result = self._http.request(
            "POST", "components", json_data=component.to_payload(), timeout=timeout
        )
        return Component.from_dict(result.get("component", result))

    def list(self, timeout: Optional[float] = None) -> List[Component]:
        """List all components in the space, in server order."""
        result = self._http.request("GET", "components", timeout=timeout)
        return [Component.from_dict(c) for c in result.get("components") or []]
