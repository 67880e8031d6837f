"""
Connection diagnostics for a Storyblok space.

Re-checks the required settings, calls the Management API and performs a
throwaway upload so credential and permission problems can be told apart.
"""

import base64
import logging
from dataclasses import dataclass
from typing import List, Optional

from .api import StoryblokClient
from .config import StoryblokConfig
from .exceptions import ConfigurationError, RemoteError, StoryblokError
from .models import UploadFile

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_WARN = "warn"
STATUS_FAIL = "fail"

# 1x1 transparent PNG
TEST_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)

TROUBLESHOOTING_TIPS = [
    "Set STORYBLOK_SPACE_ID or run 'sbm configure --space-id ID'",
    "Set STORYBLOK_MANAGEMENT_TOKEN or run 'sbm configure --token TOKEN'",
    "The management token needs permission to upload assets",
    "Files must be JPG, PNG, GIF, WebP or SVG images",
    "Files must be smaller than 10 MB",
]


@dataclass
class DiagnosticResult:
    """Outcome of a single diagnostic check."""

    test: str
    status: str
    details: str

    @property
    def passed(self) -> bool:
        return self.status != STATUS_FAIL


def _describe(error: StoryblokError) -> str:
    if isinstance(error, RemoteError):
        return f"API returned {error.status_code}: {error.body or error.message}"
    if error.details:
        return f"{error.message} ({error.details})"
    return error.message


def run_diagnostics(
    config: StoryblokConfig,
    client: Optional[StoryblokClient] = None
) -> List[DiagnosticResult]:
    """
    Run all checks against the configured space.

    Args:
        config: Configuration to verify
        client: Optional client; one is created from config if omitted

    Returns:
        One result per check, in order
    """
    results = []

    if config.space_id:
        results.append(DiagnosticResult("Space ID", STATUS_OK, f"Found: {config.space_id}"))
    else:
        results.append(DiagnosticResult("Space ID", STATUS_FAIL, "Space ID is not configured"))

    if config.management_token:
        results.append(DiagnosticResult(
            "Management Token", STATUS_OK, f"Found: {config.management_token[:10]}..."
        ))
    else:
        results.append(DiagnosticResult(
            "Management Token", STATUS_FAIL, "Management token is not configured"
        ))

    own_client = client is None
    if client is None:
        client = StoryblokClient(config)

    try:
        try:
            space = client.get_space()
            results.append(DiagnosticResult(
                "API Connection", STATUS_OK, f"Connected to space: {space.name}"
            ))
        except StoryblokError as e:
            logger.debug("Connectivity check failed: %s", e)
            results.append(DiagnosticResult("API Connection", STATUS_FAIL, _describe(e)))

        results.append(_check_upload(client))
    finally:
        if own_client:
            client.close()

    return results


def _check_upload(client: StoryblokClient) -> DiagnosticResult:
    test_file = UploadFile(name="test.png", content=TEST_PNG, content_type="image/png")
    try:
        asset = client.upload_asset(test_file)
    except RemoteError as e:
        return DiagnosticResult("Asset Upload", STATUS_WARN, _describe(e))
    except ConfigurationError as e:
        return DiagnosticResult("Asset Upload", STATUS_FAIL, e.message)
    except StoryblokError as e:
        return DiagnosticResult("Asset Upload", STATUS_FAIL, _describe(e))

    if asset.id:
        try:
            client.delete_asset(asset.id)
        except StoryblokError as e:
            logger.warning("Could not remove test asset %s: %s", asset.id, e)
            return DiagnosticResult(
                "Asset Upload", STATUS_WARN,
                f"Test upload succeeded but cleanup of asset {asset.id} failed: {_describe(e)}"
            )
    return DiagnosticResult("Asset Upload", STATUS_OK, "Test upload successful")
