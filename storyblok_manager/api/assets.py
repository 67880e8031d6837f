"""
Assets API - Asset upload, listing and deletion.
"""

import logging
from pathlib import Path
from typing import Optional, List, Union

from ._http import HTTPClient
from .stories import validate_id
from ..exceptions import ValidationError
from ..models import (
    ALLOWED_CONTENT_TYPES,
    MAX_UPLOAD_SIZE,
    Asset,
    UploadFile,
    guess_content_type,
)

logger = logging.getLogger(__name__)


def check_upload_limits(name: str, size: int, content_type: str) -> None:
    """
    Check a file's size and type against the upload limits.

    Both checks run so that every violation is reported at once.

    Raises:
        ValidationError: If the file is too large or not an allowed image type
    """
    violations = []
    if size > MAX_UPLOAD_SIZE:
        violations.append(
            f"File size {size} bytes exceeds the "
            f"{MAX_UPLOAD_SIZE // (1024 * 1024)} MB limit"
        )
    if content_type not in ALLOWED_CONTENT_TYPES:
        violations.append(
            f"Unsupported file type '{content_type}' "
            f"(allowed: JPG, PNG, GIF, WebP, SVG)"
        )
    if violations:
        raise ValidationError(
            f"Cannot upload {name}: " + "; ".join(violations),
            violations=violations,
        )


def validate_upload(file: UploadFile) -> None:
    """Check an in-memory upload against the size and type limits."""
    check_upload_limits(file.name, file.size, file.content_type)


def read_upload(path: Union[Path, str]) -> UploadFile:
    """
    Load an upload from disk.

    The size and type are checked from the file's metadata before any
    bytes are read.

    Raises:
        ValidationError: If the file is missing, unreadable or over the limits
    """
    path = Path(path)
    if not path.is_file():
        raise ValidationError(f"File not found: {path}")
    try:
        size = path.stat().st_size
    except OSError as e:
        raise ValidationError(f"Cannot read file {path}: {e}")
    check_upload_limits(path.name, size, guess_content_type(path.name))
    try:
        return UploadFile.from_path(path)
    except OSError as e:
        raise ValidationError(f"Cannot read file {path}: {e}")


class AssetsAPI:
    """
    API for asset operations.

    Handles:
    - Image uploads with local size/type checks
    - Asset listing
    - Asset deletion
    """

    def __init__(self, http: HTTPClient):
        """
        Initialize Assets API.

        Args:
            http: HTTP client instance
        """
        self._http = http

    def upload(
        self,
        file: Union[UploadFile, Path, str],
        folder_id: Optional[int] = None,
        timeout: Optional[float] = None
    ) -> Asset:
        """
        Upload an asset.

        Args:
            file: File to upload, or a path to read it from
            folder_id: Optional target asset folder
            timeout: Per-call timeout override in seconds

        Returns:
            The created asset
        """
        if file is None:
            raise ValidationError("A file is required")
        if isinstance(file, UploadFile):
            validate_upload(file)
        else:
            file = read_upload(file)

        data = {"filename": file.name}
        if folder_id:
            data["asset[folder_id]"] = str(folder_id)
        files = {"asset": (file.name, file.content, file.content_type)}

        logger.info("Uploading asset %s (%d bytes)", file.name, file.size)
        result = self._http.request(
            "POST", "assets", data=data, files=files, timeout=timeout
        )
        return Asset.from_dict(result.get("asset", result), name=file.name)

    def list(self, timeout: Optional[float] = None) -> List[Asset]:
        """List assets in the space (single page, server order)."""
        result = self._http.request("GET", "assets", timeout=timeout)
        return [Asset.from_dict(a) for a in result.get("assets") or []]

    def delete(self, asset_id: int, timeout: Optional[float] = None) -> bool:
        """Delete an asset."""
        asset_id = validate_id(asset_id, "Asset ID")
        self._http.request("DELETE", f"assets/{asset_id}", timeout=timeout)
        return True
