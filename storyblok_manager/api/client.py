"""
Storyblok API Client - Main facade for all Management API operations.

Organizes endpoints into domain-specific modules and exposes the common
operations as flat methods.
"""

from pathlib import Path
from typing import Optional, Dict, Any, List, Union

from ..config import StoryblokConfig, get_config
from ..models import Asset, Component, Space, Story, UploadFile
from ._http import HTTPClient, Transport
from .assets import AssetsAPI
from .components import ComponentsAPI
from .spaces import SpacesAPI
from .stories import StoriesAPI


class StoryblokClient:
    """
    Client for the Storyblok Management API.

    This is a facade that provides both:
    - Domain-specific sub-clients (client.components, client.assets, etc.)
    - Flat methods (client.get_assets(), etc.)

    Usage:
        config = StoryblokConfig(space_id="12345", management_token="...")
        with StoryblokClient(config) as client:
            story = client.create_story("Home", "home", "page")
            assets = client.get_assets()
    """

    def __init__(
        self,
        config: Optional[StoryblokConfig] = None,
        transport: Optional[Transport] = None
    ):
        """
        Initialize the API client.

        Args:
            config: Optional configuration. Uses global config if not provided.
            transport: Optional transport, mainly for tests.
        """
        self._http = HTTPClient(config or get_config(), transport)

        self.components = ComponentsAPI(self._http)
        self.stories = StoriesAPI(self._http)
        self.assets = AssetsAPI(self._http)
        self.spaces = SpacesAPI(self._http)

    @property
    def config(self) -> StoryblokConfig:
        """Get the configuration."""
        return self._http.config

    # ========== Components ==========

    def create_component(
        self,
        name: str,
        display_name: Optional[str] = None,
        schema: Optional[Dict[str, Any]] = None,
        preview_tmpl: Optional[str] = None,
        is_root: bool = False,
        timeout: Optional[float] = None
    ) -> Component:
        """Create a component."""
        return self.components.create(name, display_name, schema, preview_tmpl, is_root, timeout)

    def get_components(self, timeout: Optional[float] = None) -> List[Component]:
        """List components."""
        return self.components.list(timeout)

    # ========== Stories ==========

    def create_story(
        self,
        title: str,
        slug: str,
        component: str,
        content: Optional[Dict[str, Any]] = None,
        publish: bool = False,
        path: str = "",
        timeout: Optional[float] = None
    ) -> Story:
        """Create a story."""
        return self.stories.create(title, slug, component, content, publish, path, timeout)

    def update_story(
        self,
        story_id: int,
        timeout: Optional[float] = None,
        **fields: Any
    ) -> Story:
        """Update a story."""
        return self.stories.update(story_id, timeout=timeout, **fields)

    def publish_story(self, story_id: int, timeout: Optional[float] = None) -> Story:
        """Publish a story."""
        return self.stories.publish(story_id, timeout)

    # ========== Assets ==========

    def upload_asset(
        self,
        file: Union[UploadFile, Path, str],
        folder_id: Optional[int] = None,
        timeout: Optional[float] = None
    ) -> Asset:
        """Upload an asset."""
        return self.assets.upload(file, folder_id, timeout)

    def get_assets(self, timeout: Optional[float] = None) -> List[Asset]:
        """List assets."""
        return self.assets.list(timeout)

    def delete_asset(self, asset_id: int, timeout: Optional[float] = None) -> bool:
        """Delete an asset."""
        return self.assets.delete(asset_id, timeout)

    # ========== Space ==========

    def get_space(self, timeout: Optional[float] = None) -> Space:
        """Fetch the configured space."""
        return self.spaces.get(timeout)

    # ========== Context Manager ==========

    def close(self) -> None:
        """Close the HTTP session."""
        self._http.close()

    def __enter__(self) -> "StoryblokClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# Convenience function for quick API access
def get_client(
    config: Optional[StoryblokConfig] = None,
    transport: Optional[Transport] = None
) -> StoryblokClient:
    """
    Get an API client instance.

    Args:
        config: Optional configuration
        transport: Optional transport

    Returns:
        StoryblokClient instance
    """
    return StoryblokClient(config, transport)
