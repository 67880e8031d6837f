"""
Storyblok Management API Client Package.

Structure:
    - client.py: Main StoryblokClient facade
    - _http.py: Transport and base HTTP client (auth, config checks, errors)
    - components.py: Component schema management
    - stories.py: Story creation, updates and publishing
    - assets.py: Asset upload, listing and deletion
    - spaces.py: Space lookup

Usage:
    from storyblok_manager.api import StoryblokClient, get_client

    client = StoryblokClient(config)

    # Domain style
    assets = client.assets.list()

    # Flat style
    assets = client.get_assets()
"""

from .client import StoryblokClient, get_client
from ._http import HTTPClient, RequestsTransport, Transport, TransportResponse
from .assets import AssetsAPI, check_upload_limits, read_upload, validate_upload
from .components import ComponentsAPI
from .spaces import SpacesAPI
from .stories import StoriesAPI

__all__ = [
    # Main client
    "StoryblokClient",
    "get_client",
    # HTTP layer
    "HTTPClient",
    "Transport",
    "RequestsTransport",
    "TransportResponse",
    # Domain APIs
    "ComponentsAPI",
    "StoriesAPI",
    "AssetsAPI",
    "SpacesAPI",
    "check_upload_limits",
    "read_upload",
    "validate_upload",
]
