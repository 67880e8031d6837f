"""
Shared fixtures: fake transports and configurations.
"""

import json
import re
from typing import Any, Dict, List, Optional

import pytest

from storyblok_manager.api import StoryblokClient, Transport, TransportResponse
from storyblok_manager.config import StoryblokConfig


class FakeTransport(Transport):
    """Transport returning queued responses and recording every call."""

    def __init__(self, responses: Optional[List[TransportResponse]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []
        self.closed = False

    def queue(self, status_code: int, body: Any = None) -> None:
        text = body if isinstance(body, str) else json.dumps(body) if body is not None else ""
        self.responses.append(TransportResponse(status_code=status_code, body=text))

    def send(self, method, url, headers, json_data=None, data=None, files=None, timeout=None):
        self.calls.append({
            "method": method,
            "url": url,
            "headers": headers,
            "json": json_data,
            "data": data,
            "files": files,
            "timeout": timeout,
        })
        if isinstance(self.responses[0], Exception):
            raise self.responses.pop(0)
        return self.responses.pop(0)

    def close(self) -> None:
        self.closed = True


class FakeSpace(Transport):
    """In-memory Management API for one space."""

    def __init__(self, name: str = "Test Space"):
        self.name = name
        self.calls: List[Dict[str, Any]] = []
        self.components: List[Dict[str, Any]] = []
        self.stories: Dict[int, Dict[str, Any]] = {}
        self.assets: Dict[int, Dict[str, Any]] = {}
        self._next_id = 1000

    def _id(self) -> int:
        self._next_id += 1
        return self._next_id

    @staticmethod
    def _reply(status: int, body: Any = None) -> TransportResponse:
        return TransportResponse(status, json.dumps(body) if body is not None else "")

    def send(self, method, url, headers, json_data=None, data=None, files=None, timeout=None):
        self.calls.append({"method": method, "url": url})
        path = re.sub(r"^.*/spaces/[^/]+", "", url)

        if method == "GET" and path == "":
            return self._reply(200, {"space": {"id": 1, "name": self.name}})
        if method == "POST" and path == "/components":
            component = dict(json_data["component"], id=self._id())
            self.components.append(component)
            return self._reply(201, {"component": component})
        if method == "GET" and path == "/components":
            return self._reply(200, {"components": self.components})
        if method == "POST" and path == "/stories":
            story = dict(json_data["story"], id=self._id())
            self.stories[story["id"]] = story
            return self._reply(201, {"story": story})
        match = re.match(r"^/stories/(\d+)(/publish)?$", path)
        if method == "PUT" and match:
            story = self.stories.get(int(match.group(1)))
            if story is None:
                return self._reply(404, {"error": "This record could not be found"})
            if match.group(2):
                story["published"] = True
            else:
                story.update(json_data["story"])
            return self._reply(200, {"story": story})
        if method == "POST" and path == "/assets":
            name = files["asset"][0]
            asset = {
                "id": self._id(),
                "filename": f"https://a.storyblok.com/f/1/{name}",
                "name": name,
            }
            self.assets[asset["id"]] = asset
            return self._reply(201, asset)
        if method == "GET" and path == "/assets":
            return self._reply(200, {"assets": list(self.assets.values())})
        match = re.match(r"^/assets/(\d+)$", path)
        if method == "DELETE" and match:
            if self.assets.pop(int(match.group(1)), None) is None:
                return self._reply(404, {"error": "This record could not be found"})
            return self._reply(204)
        return self._reply(404, {"error": "Not found"})


@pytest.fixture
def config():
    return StoryblokConfig(space_id="12345", management_token="test-token-abcdefghij")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def client(config, transport):
    return StoryblokClient(config, transport=transport)


@pytest.fixture
def fake_space():
    return FakeSpace()


@pytest.fixture
def space_client(config, fake_space):
    return StoryblokClient(config, transport=fake_space)
