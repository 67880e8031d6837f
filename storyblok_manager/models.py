"""
Transfer objects mirroring Storyblok Management API resources.

The client never generates identifiers; ``id`` fields are whatever the
server returned.
"""

import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

MAX_UPLOAD_SIZE = 10 * 1024 * 1024

ALLOWED_CONTENT_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/svg+xml",
)


@dataclass
class Component:
    """A content-block schema definition."""

    name: str
    display_name: Optional[str] = None
    schema: Dict[str, Any] = field(default_factory=dict)
    preview_tmpl: Optional[str] = None
    is_root: bool = False
    id: Optional[int] = None

    def __post_init__(self):
        if not self.display_name:
            self.display_name = self.name

    def to_payload(self) -> Dict[str, Any]:
        return {
            "component": {
                "name": self.name,
                "display_name": self.display_name,
                "schema": self.schema,
                "preview_tmpl": self.preview_tmpl,
                "is_root": self.is_root,
            }
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Component":
        return cls(
            name=data.get("name", ""),
            display_name=data.get("display_name"),
            schema=data.get("schema") or {},
            preview_tmpl=data.get("preview_tmpl"),
            is_root=bool(data.get("is_root", False)),
            id=data.get("id"),
        )


@dataclass
class Story:
    """A content entry instantiating one component."""

    id: Optional[int]
    title: str
    slug: str
    component: str = ""
    content: Dict[str, Any] = field(default_factory=dict)
    publish: bool = False
    path: str = ""
    full_slug: Optional[str] = None
    published: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Story":
        content = data.get("content") or {}
        # The API reports the component on the content root
        component = data.get("component") or content.get("component", "")
        return cls(
            id=data.get("id"),
            title=data.get("name") or data.get("title", ""),
            slug=data.get("slug", ""),
            component=component,
            content=content,
            publish=bool(data.get("publish", False)),
            path=data.get("path") or "",
            full_slug=data.get("full_slug"),
            published=data.get("published"),
        )


@dataclass
class Asset:
    """An uploaded file with a server-assigned URL."""

    id: Optional[int]
    filename: str
    name: str = ""
    folder_id: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], name: str = "") -> "Asset":
        return cls(
            id=data.get("id"),
            filename=data.get("filename") or data.get("pretty_url") or "",
            name=data.get("name") or data.get("short_filename") or name,
            folder_id=data.get("asset_folder_id", data.get("folder_id")),
        )


@dataclass
class Space:
    """A Storyblok space as returned by the connectivity check."""

    id: Optional[int]
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Space":
        return cls(id=data.get("id"), name=data.get("name", ""))


@dataclass
class UploadFile:
    """A file to be uploaded as an asset."""

    name: str
    content: bytes
    content_type: str

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(
        cls,
        path: Union[str, Path],
        content_type: Optional[str] = None
    ) -> "UploadFile":
        """
        Read a file from disk.

        Args:
            path: File path
            content_type: MIME type; guessed from the extension if omitted

        Returns:
            UploadFile with the file's bytes
        """
        path = Path(path)
        if content_type is None:
            content_type = guess_content_type(path.name)
        return cls(name=path.name, content=path.read_bytes(), content_type=content_type)


def guess_content_type(filename: str) -> str:
    """Guess a MIME type from a file name."""
    if filename.lower().endswith(".webp"):
        return "image/webp"
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or "application/octet-stream"
