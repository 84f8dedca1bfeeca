"""Shared fixtures for the Blockstack client tests."""

import json

import httpx
import pytest

from blockstack_client import BlockstackClient, Credentials
from blockstack_client import credentials as credentials_module

APP_ID = "test-app-id"
APP_SECRET = "test-app-secret"


@pytest.fixture(autouse=True)
def reset_default_credentials():
    """Every test starts (and ends) without process-wide credentials."""
    credentials_module.reset()
    yield
    credentials_module.reset()


@pytest.fixture
def app_credentials():
    return Credentials(app_id=APP_ID, app_secret=APP_SECRET)


class RecordingTransport:
    """Mock transport that records every request it sees."""

    def __init__(self, status_code=200, body=None, raw=None, exc=None, headers=None):
        self.status_code = status_code
        self.body = body
        self.raw = raw
        self.exc = exc
        self.headers = headers or {}
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc("mock transport failure", request=request)
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw, headers=self.headers)
        if self.body is None:
            return httpx.Response(self.status_code, content=b"")
        return httpx.Response(self.status_code, content=json.dumps(self.body).encode("utf-8"))

    def client(self, credentials=None, **kwargs) -> BlockstackClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self))
        return BlockstackClient(credentials=credentials, http_client=http_client, **kwargs)


@pytest.fixture
def make_transport():
    """Factory for RecordingTransport instances."""
    return RecordingTransport
