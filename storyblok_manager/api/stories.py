"""
Stories API - Story creation, updates and publishing.
"""

from typing import Optional, Dict, Any

from ._http import HTTPClient
from ..exceptions import ValidationError
from ..models import Story

UPDATABLE_FIELDS = ("title", "slug", "component", "content", "publish", "path")


def validate_id(value: Any, label: str) -> int:
    """Check that an identifier is a positive integer."""
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a positive integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a positive integer, got {value!r}")
    if number <= 0 or str(number) != str(value).strip():
        raise ValidationError(f"{label} must be a positive integer, got {value!r}")
    return number


class StoriesAPI:
    """
    API for story operations.

    Handles:
    - Story creation
    - Partial story updates
    - Publishing
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Stories API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def create(
        self,
        title: str,
        slug: str,
        component: str,
        content: Optional[Dict[str, Any]] = None,
        publish: bool = False,
        path: str = "",
        timeout: Optional[float] = None
    ) -> Story:
        """
        Create a story.

        Args:
            title: Story title
            slug: Slug, unique within the parent path
            component: Name of an existing component
            content: Field values
            publish: Publish immediately
            path: Parent path
            timeout: Per-call timeout override in seconds

        Returns:
            The story as created by the server
        """
        missing = [
            label for label, value in
            (("title", title), ("slug", slug), ("component", component))
            if not value
        ]
        if missing:
            raise ValidationError(
                f"Missing required story fields: {', '.join(missing)}",
                violations=[f"{m} is required" for m in missing],
            )

        payload = {
            "story": {
                "title": title,
                "slug": slug,
                "component": component,
                "content": content or {},
                "publish": publish,
                "path": path,
            }
        }
        result = self._http.request("POST", "stories", json_data=payload, timeout=timeout)
        return Story.from_dict(result.get("story", result))

    def update(
        self,
        story_id: int,
        timeout: Optional[float] = None,
        **fields: Any
    ) -> Story:
        """
        Update a story with the given fields only.

        Args:
            story_id: Server-assigned story ID
            timeout: Per-call timeout override in seconds
            **fields: Any of title, slug, component, content, publish, path

        Returns:
            The updated story
        """
        story_id = validate_id(story_id, "Story ID")

        unknown = sorted(set(fields) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError(f"Unknown story fields: {', '.join(unknown)}")

        payload = {"story": fields}
        result = self._http.request(
            "PUT", f"stories/{story_id}", json_data=payload, timeout=timeout
        )
        return Story.from_dict(result.get("story", result))

    def publish(self, story_id: int, timeout: Optional[float] = None) -> Story:
        """Publish a story."""
        story_id = validate_id(story_id, "Story ID")
        result = self._http.request("PUT", f"stories/{story_id}/publish", timeout=timeout)
        return Story.from_dict(result.get("story", result))
