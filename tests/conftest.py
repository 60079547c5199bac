"""Shared fixtures: a small Figma document and a fake Figma API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from figdag._figma import FigmaClient

FILE_KEY = "KEY123"
TOKEN = "secret-token"


def make_document() -> dict[str, Any]:
    """A document with three frames: Home <-> Cart, and Orphan pointing nowhere."""
    return {
        "id": "0:0",
        "type": "DOCUMENT",
        "name": "Document",
        "children": [
            {
                "id": "0:1",
                "type": "CANVAS",
                "name": "Page 1",
                "children": [
                    {
                        "id": "1:1",
                        "type": "FRAME",
                        "name": "Home",
                        "children": [
                            {
                                "id": "1:2",
                                "type": "TEXT",
                                "name": "Button",
                                "interactions": [
                                    {
                                        "trigger": {"type": "ON_CLICK"},
                                        "actions": [
                                            {"type": "NODE", "destinationId": "2:1", "navigation": "NAVIGATE"},
                                        ],
                                    },
                                ],
                            },
                        ],
                    },
                    {
                        "id": "2:1",
                        "type": "FRAME",
                        "name": "Cart",
                        "interactions": [
                            {
                                "trigger": {"type": "ON_HOVER"},
                                "actions": [
                                    {"type": "NODE", "destinationId": "1:1", "navigation": "NAVIGATE"},
                                    {"type": "BACK"},
                                ],
                            },
                            {
                                "trigger": {"type": "ON_MEDIA_END"},
                                "actions": [{"type": "NODE", "destinationId": "1:1"}],
                            },
                        ],
                    },
                    {
                        "id": "3:1",
                        "type": "FRAME",
                        "name": "Orphan",
                        "interactions": [
                            {
                                "trigger": {"type": "ON_CLICK"},
                                "actions": [{"type": "NODE", "destinationId": "9:9"}],
                            },
                        ],
                    },
                ],
            },
        ],
    }


@dataclass
class FakeFigma:
    """In-memory stand-in for the Figma REST API."""

    file_key: str = FILE_KEY
    token: str = TOKEN
    versions: list[str] = field(default_factory=lambda: ["v2", "v1"])
    document: dict[str, Any] = field(default_factory=make_document)
    images: dict[str, str] = field(default_factory=lambda: {"1:1": "https://img/1", "2:1": "https://img/2"})
    requests: list[httpx.Request] = field(default_factory=list)

    def paths(self) -> list[str]:
        return [request.url.path for request in self.requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.headers.get("X-Figma-Token") != self.token:
            return httpx.Response(403, json={"status": 403, "err": "Invalid token"})

        path = request.url.path
        if path == f"/v1/files/{self.file_key}/versions":
            return httpx.Response(200, json={"versions": [{"id": v} for v in self.versions]})
        if path == f"/v1/files/{self.file_key}":
            return httpx.Response(200, json={"name": "Test file", "document": self.document})
        if path == f"/v1/images/{self.file_key}":
            ids = request.url.params["ids"].split(",")
            return httpx.Response(200, json={"err": None, "images": {i: self.images[i] for i in ids if i in self.images}})
        return httpx.Response(404, json={"status": 404, "err": "Not found"})

    def client(self, token: str | None = None) -> FigmaClient:
        return FigmaClient(token or self.token, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def fake_figma() -> FakeFigma:
    return FakeFigma()


@pytest.fixture
def figma_document() -> dict[str, Any]:
    return make_document()
