"""
Tests for the Management API client.
"""

import threading
import time
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import requests

from storyblok_manager.api import (
    RequestsTransport,
    StoryblokClient,
    Transport,
    TransportResponse,
)
from storyblok_manager.config import StoryblokConfig
from storyblok_manager.exceptions import (
    APIError,
    ConfigurationError,
    RemoteError,
    TransportError,
    ValidationError,
)
from storyblok_manager.models import MAX_UPLOAD_SIZE, UploadFile

SPACE_URL = "https://mapi.storyblok.com/v1/spaces/12345"


def png(size: int = 2048, name: str = "photo.png") -> UploadFile:
    return UploadFile(name=name, content=b"\x89PNG" + b"\0" * (size - 4), content_type="image/png")


class TestRequests:
    """Tests for request construction."""

    def test_raw_token_authorization_header(self, client, transport):
        """Test the token is sent without a scheme prefix."""
        transport.queue(200, {"components": []})
        client.get_components()
        assert transport.calls[0]["headers"]["Authorization"] == "test-token-abcdefghij"

    def test_space_scoped_url(self, client, transport):
        """Test endpoints are built under the configured space."""
        transport.queue(200, {"assets": []})
        client.get_assets()
        assert transport.calls[0]["method"] == "GET"
        assert transport.calls[0]["url"] == f"{SPACE_URL}/assets"

    def test_default_timeout_from_config(self, client, transport):
        """Test the configured timeout is used."""
        transport.queue(200, {"assets": []})
        client.get_assets()
        assert transport.calls[0]["timeout"] == 30

    def test_per_call_timeout_override(self, client, transport):
        """Test a per-call timeout takes precedence."""
        transport.queue(200, {"assets": []})
        client.get_assets(timeout=2.5)
        assert transport.calls[0]["timeout"] == 2.5

    def test_close_closes_transport(self, config, transport):
        """Test the context manager closes the transport."""
        with StoryblokClient(config, transport=transport):
            pass
        assert transport.closed


class TestConfigurationGate:
    """Tests for failing fast on missing configuration."""

    @pytest.mark.parametrize("space_id,token", [("", "tok"), ("123", ""), ("", "")])
    @pytest.mark.parametrize("operation", [
        lambda c: c.create_component("hero"),
        lambda c: c.get_components(),
        lambda c: c.create_story("Home", "home", "page"),
        lambda c: c.update_story(1, title="x"),
        lambda c: c.publish_story(1),
        lambda c: c.upload_asset(png()),
        lambda c: c.get_assets(),
        lambda c: c.delete_asset(1),
        lambda c: c.get_space(),
    ])
    def test_missing_settings_raise_before_network(self, transport, space_id, token, operation):
        """Test every operation raises ConfigurationError without sending."""
        config = StoryblokConfig(space_id=space_id, management_token=token)
        client = StoryblokClient(config, transport=transport)

        with pytest.raises(ConfigurationError) as exc_info:
            operation(client)

        assert transport.calls == []
        assert exc_info.value.missing

    def test_missing_settings_are_named(self, transport):
        """Test the error lists which settings are missing."""
        client = StoryblokClient(StoryblokConfig(space_id="1"), transport=transport)
        with pytest.raises(ConfigurationError) as exc_info:
            client.get_assets()
        assert exc_info.value.missing == ["management_token"]
        assert "management_token" in str(exc_info.value)


class TestComponents:
    """Tests for component operations."""

    def test_create_component_defaults(self, client, transport):
        """Test display_name defaults to name and schema to empty."""
        transport.queue(201, {"component": {
            "id": 7, "name": "hero", "display_name": "hero", "schema": {}, "is_root": False
        }})

        component = client.create_component("hero")

        payload = transport.calls[0]["json"]
        assert payload == {"component": {
            "name": "hero",
            "display_name": "hero",
            "schema": {},
            "preview_tmpl": None,
            "is_root": False,
        }}
        assert transport.calls[0]["method"] == "POST"
        assert transport.calls[0]["headers"]["Content-Type"] == "application/json"
        assert component.id == 7
        assert component.display_name == "hero"
        assert component.schema == {}

    def test_create_component_requires_name(self, client, transport):
        """Test an empty name is rejected locally."""
        with pytest.raises(ValidationError):
            client.create_component("")
        assert transport.calls == []

    def test_get_components_preserves_order(self, client, transport):
        """Test components come back in server order."""
        transport.queue(200, {"components": [{"name": "page"}, {"name": "hero"}]})
        components = client.get_components()
        assert [c.name for c in components] == ["page", "hero"]

    def test_create_component_conflict(self, client, transport):
        """Test a 422 surfaces as RemoteError with the body."""
        body = '{"name":["has already been taken"]}'
        transport.queue(422, body)

        with pytest.raises(RemoteError) as exc_info:
            client.create_component("hero")

        assert exc_info.value.status_code == 422
        assert exc_info.value.body == body
        assert "has already been taken" in str(exc_info.value)


class TestStories:
    """Tests for story operations."""

    def test_create_story_payload(self, client, transport):
        """Test the story body uses defaults for optional fields."""
        transport.queue(201, {"story": {"id": 99, "name": "Home", "slug": "home",
                                        "content": {"component": "page"}}})

        story = client.create_story("Home", "home", "page")

        assert transport.calls[0]["json"] == {"story": {
            "title": "Home",
            "slug": "home",
            "component": "page",
            "content": {},
            "publish": False,
            "path": "",
        }}
        assert story.id == 99
        assert story.title == "Home"
        assert story.component == "page"

    def test_create_story_requires_fields(self, client, transport):
        """Test missing title/slug/component are reported together."""
        with pytest.raises(ValidationError) as exc_info:
            client.create_story("", "", "page")
        assert len(exc_info.value.violations) == 2
        assert transport.calls == []

    def test_update_story_sends_partial_fields(self, client, transport):
        """Test only the given fields are sent."""
        transport.queue(200, {"story": {"id": 5, "name": "New", "slug": "home"}})

        story = client.update_story(5, title="New")

        assert transport.calls[0]["method"] == "PUT"
        assert transport.calls[0]["url"] == f"{SPACE_URL}/stories/5"
        assert transport.calls[0]["json"] == {"story": {"title": "New"}}
        assert story.title == "New"

    @pytest.mark.parametrize("story_id", [0, -3, "abc", None, 1.5, True])
    def test_update_story_rejects_bad_ids(self, client, transport, story_id):
        """Test story IDs must be positive integers."""
        with pytest.raises(ValidationError):
            client.update_story(story_id, title="x")
        assert transport.calls == []

    def test_update_story_rejects_unknown_fields(self, client, transport):
        """Test unknown fields are rejected locally."""
        with pytest.raises(ValidationError):
            client.update_story(5, colour="red")
        assert transport.calls == []

    def test_publish_story(self, client, transport):
        """Test publishing uses the publish endpoint without a body."""
        transport.queue(200, {"story": {"id": 5, "name": "Home", "slug": "home", "published": True}})

        story = client.publish_story(5)

        assert transport.calls[0]["method"] == "PUT"
        assert transport.calls[0]["url"] == f"{SPACE_URL}/stories/5/publish"
        assert transport.calls[0]["json"] is None
        assert story.published is True

    def test_round_trip_through_space(self, space_client):
        """Test a created story keeps its fields and gets a server ID."""
        created = space_client.create_story("About", "about", "page")
        updated = space_client.update_story(created.id, content={"body": []})

        assert isinstance(created.id, int)
        assert updated.id == created.id
        assert (updated.title, updated.slug, updated.component) == ("About", "about", "page")


class TestAssetUpload:
    """Tests for asset upload."""

    def test_upload_png(self, space_client):
        """Test a 2 KB PNG upload returns URL and original name."""
        asset = space_client.upload_asset(png(2048, "photo.png"))

        assert asset.filename
        assert asset.filename.startswith("https://")
        assert asset.name == "photo.png"

    def test_upload_multipart_fields(self, client, transport):
        """Test the multipart form layout."""
        transport.queue(201, {"id": 1, "filename": "https://a.storyblok.com/f/1/photo.png"})

        client.upload_asset(png(), folder_id=42)

        call = transport.calls[0]
        assert call["method"] == "POST"
        assert call["url"] == f"{SPACE_URL}/assets"
        assert call["data"] == {"filename": "photo.png", "asset[folder_id]": "42"}
        assert call["files"]["asset"][0] == "photo.png"
        assert call["files"]["asset"][2] == "image/png"
        assert call["json"] is None

    def test_upload_without_folder(self, client, transport):
        """Test the folder field is omitted when not given."""
        transport.queue(201, {"id": 1, "filename": "https://a.storyblok.com/f/1/photo.png"})
        client.upload_asset(png())
        assert "asset[folder_id]" not in transport.calls[0]["data"]

    def test_upload_name_falls_back_to_file_name(self, client, transport):
        """Test the asset name defaults to the uploaded file name."""
        transport.queue(201, {"id": 1, "filename": "https://a.storyblok.com/f/1/x.png"})
        asset = client.upload_asset(png(name="x.png"))
        assert asset.name == "x.png"

    def test_oversized_upload_rejected(self, client, transport):
        """Test files over 10 MiB never reach the transport."""
        with pytest.raises(ValidationError) as exc_info:
            client.upload_asset(png(MAX_UPLOAD_SIZE + 1))
        assert transport.calls == []
        assert "10 MB" in str(exc_info.value)

    def test_upload_at_limit_allowed(self, client, transport):
        """Test a file of exactly 10 MiB is accepted."""
        transport.queue(201, {"id": 1, "filename": "https://a.storyblok.com/f/1/big.png"})
        client.upload_asset(png(MAX_UPLOAD_SIZE))
        assert len(transport.calls) == 1

    @pytest.mark.parametrize("content_type", ["application/pdf", "image/bmp", "text/plain", ""])
    def test_disallowed_type_rejected(self, client, transport, content_type):
        """Test non-image types never reach the transport."""
        upload = UploadFile(name="file.bin", content=b"data", content_type=content_type)
        with pytest.raises(ValidationError):
            client.upload_asset(upload)
        assert transport.calls == []

    @pytest.mark.parametrize("content_type", [
        "image/jpeg", "image/png", "image/gif", "image/webp", "image/svg+xml"
    ])
    def test_allowed_types(self, client, transport, content_type):
        """Test every allowed image type is sent."""
        transport.queue(201, {"id": 1, "filename": "https://a.storyblok.com/f/1/f"})
        client.upload_asset(UploadFile(name="f", content=b"x", content_type=content_type))
        assert len(transport.calls) == 1

    def test_both_violations_reported(self, client):
        """Test size and type violations are reported together."""
        upload = UploadFile(name="big.pdf", content=b"\0" * (MAX_UPLOAD_SIZE + 1),
                            content_type="application/pdf")
        with pytest.raises(ValidationError) as exc_info:
            client.upload_asset(upload)
        assert len(exc_info.value.violations) == 2

    def test_validation_runs_before_configuration_check(self, transport):
        """Test an invalid file is reported even without configuration."""
        client = StoryblokClient(StoryblokConfig(), transport=transport)
        with pytest.raises(ValidationError):
            client.upload_asset(png(MAX_UPLOAD_SIZE + 1))

    def test_upload_from_path(self, client, transport, tmp_path):
        """Test uploading from a file path guesses the MIME type."""
        image = tmp_path / "logo.svg"
        image.write_text("<svg/>")
        transport.queue(201, {"id": 1, "filename": "https://a.storyblok.com/f/1/logo.svg"})

        client.upload_asset(image)

        assert transport.calls[0]["files"]["asset"] == ("logo.svg", b"<svg/>", "image/svg+xml")

    def test_upload_missing_path(self, client, transport, tmp_path):
        """Test a missing file is a validation error."""
        with pytest.raises(ValidationError):
            client.upload_asset(tmp_path / "missing.png")
        assert transport.calls == []

    def test_oversized_path_rejected_before_reading(self, client, transport, tmp_path):
        """Test an oversized file on disk is rejected without reading its bytes."""
        image = tmp_path / "huge.png"
        with open(image, "wb") as f:
            f.truncate(MAX_UPLOAD_SIZE + 1)

        with patch.object(Path, "read_bytes") as read_bytes:
            with pytest.raises(ValidationError) as exc_info:
                client.upload_asset(image)

        read_bytes.assert_not_called()
        assert transport.calls == []
        assert "10 MB" in str(exc_info.value)

    def test_disallowed_path_type_rejected_before_reading(self, client, transport, tmp_path):
        """Test a non-image file on disk is rejected without reading its bytes."""
        document = tmp_path / "notes.txt"
        document.write_text("hello")

        with patch.object(Path, "read_bytes") as read_bytes:
            with pytest.raises(ValidationError) as exc_info:
                client.upload_asset(document)

        read_bytes.assert_not_called()
        assert exc_info.value.violations == [
            "Unsupported file type 'text/plain' (allowed: JPG, PNG, GIF, WebP, SVG)"
        ]

    def test_unreadable_path_is_validation_error(self, client, transport, tmp_path):
        """Test a read failure on disk is reported as a validation error."""
        image = tmp_path / "locked.png"
        image.write_bytes(b"\x89PNG")

        with patch.object(Path, "read_bytes", side_effect=PermissionError("denied")):
            with pytest.raises(ValidationError) as exc_info:
                client.upload_asset(image)

        assert "Cannot read file" in str(exc_info.value)
        assert transport.calls == []

    def test_upload_rejection_keeps_body(self, client, transport):
        """Test the server's error body is captured verbatim."""
        transport.queue(403, "Forbidden: missing upload:asset permission")

        with pytest.raises(RemoteError) as exc_info:
            client.upload_asset(png())

        assert exc_info.value.status_code == 403
        assert exc_info.value.body == "Forbidden: missing upload:asset permission"
        assert exc_info.value.details == "Forbidden: missing upload:asset permission"


class TestAssetListAndDelete:
    """Tests for asset listing and deletion."""

    def test_empty_space_returns_empty_list(self, space_client):
        """Test no assets is an empty list, not an error."""
        assert space_client.get_assets() == []

    def test_missing_assets_key_returns_empty_list(self, client, transport):
        """Test a response without an assets key is an empty list."""
        transport.queue(200, {})
        assert client.get_assets() == []

    def test_list_parses_assets(self, client, transport):
        """Test asset fields are mapped."""
        transport.queue(200, {"assets": [
            {"id": 1, "filename": "https://a.storyblok.com/f/1/a.png", "asset_folder_id": 3},
            {"id": 2, "filename": "https://a.storyblok.com/f/1/b.png"},
        ]})

        assets = client.get_assets()

        assert [a.id for a in assets] == [1, 2]
        assert assets[0].folder_id == 3

    def test_delete_asset(self, client, transport):
        """Test deletion returns True on 204."""
        transport.queue(204)
        assert client.delete_asset(8) is True
        assert transport.calls[0]["method"] == "DELETE"
        assert transport.calls[0]["url"] == f"{SPACE_URL}/assets/8"

    def test_delete_twice(self, space_client, fake_space):
        """Test the second delete of the same asset is a not-found RemoteError."""
        asset = space_client.upload_asset(png())
        other = space_client.upload_asset(png(name="other.png"))

        assert space_client.delete_asset(asset.id) is True
        with pytest.raises(RemoteError) as exc_info:
            space_client.delete_asset(asset.id)

        assert exc_info.value.status_code == 404
        assert exc_info.value.is_not_found
        assert [a.id for a in space_client.get_assets()] == [other.id]

    def test_failure_does_not_affect_next_call(self, client, transport):
        """Test a failed call leaves the client usable."""
        transport.queue(500, "boom")
        transport.queue(200, {"assets": []})

        with pytest.raises(RemoteError):
            client.get_assets()
        assert client.get_assets() == []


class TestErrors:
    """Tests for error mapping."""

    def test_remote_error_is_api_error(self, client, transport):
        """Test remote failures share the APIError base."""
        transport.queue(401, {"error": "Unauthorized"})
        with pytest.raises(APIError) as exc_info:
            client.get_components()
        assert isinstance(exc_info.value, RemoteError)
        assert exc_info.value.response_data == {"error": "Unauthorized"}
        assert "Unauthorized" in str(exc_info.value)

    def test_transport_error_propagates(self, client, transport):
        """Test transport failures surface as TransportError."""
        transport.responses.append(TransportError("Connection failed: refused"))
        with pytest.raises(APIError) as exc_info:
            client.get_assets()
        assert isinstance(exc_info.value, TransportError)
        assert exc_info.value.status_code is None


class TestRequestsTransport:
    """Tests for the requests-backed transport."""

    def test_send_returns_status_and_body(self):
        """Test a response is converted to TransportResponse."""
        transport = RequestsTransport()
        response = MagicMock(status_code=201, text='{"id": 1}', headers={"X-Test": "1"})

        with patch.object(requests.Session, "request", return_value=response) as mock_request:
            result = transport.send("POST", "https://example.com", headers={"Authorization": "t"})

        assert result == TransportResponse(201, '{"id": 1}', {"X-Test": "1"})
        assert mock_request.call_args.kwargs["verify"] is True

    @pytest.mark.parametrize("exc,prefix", [
        (requests.exceptions.ConnectionError("refused"), "Connection failed"),
        (requests.exceptions.Timeout("slow"), "Request timed out"),
        (requests.exceptions.TooManyRedirects("loop"), "Request failed"),
    ])
    def test_send_wraps_request_exceptions(self, exc, prefix):
        """Test requests exceptions become TransportError with the cause."""
        transport = RequestsTransport()

        with patch.object(requests.Session, "request", side_effect=exc):
            with pytest.raises(TransportError) as exc_info:
                transport.send("GET", "https://example.com", headers={})

        assert str(exc_info.value).startswith(prefix)
        assert exc_info.value.cause is exc

    def test_close_releases_session(self):
        """Test close drops the session."""
        transport = RequestsTransport()
        session = transport.session
        with patch.object(session, "close") as mock_close:
            transport.close()
        mock_close.assert_called_once()
        assert transport._session is None

    def test_session_created_once_under_concurrency(self):
        """Test concurrent first use shares a single session."""
        transport = RequestsTransport()
        start = threading.Barrier(8)
        seen = []

        def slow_session():
            time.sleep(0.01)
            return MagicMock()

        def use_session():
            start.wait()
            seen.append(transport.session)

        with patch("storyblok_manager.api._http.requests.Session", side_effect=slow_session) as mock_session:
            threads = [threading.Thread(target=use_session) for _ in range(8)]
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join()

        mock_session.assert_called_once()
        assert len(seen) == 8
        assert all(s is seen[0] for s in seen)


class TestTransportInterface:
    """Tests for the Transport base class."""

    def test_send_is_required(self):
        """Test a transport without send cannot be created."""
        class Incomplete(Transport):
            pass

        with pytest.raises(TypeError):
            Incomplete()

    def test_close_defaults_to_noop(self):
        """Test close is optional for transports."""
        class Minimal(Transport):
            def send(self, method, url, headers, json_data=None, data=None,
                     files=None, timeout=None):
                return TransportResponse(200)

        Minimal().close()
