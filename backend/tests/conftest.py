"""
Shared fixtures: GitHub clients wired to an in-process httpx.MockTransport
so no test touches the network.
"""

import json

import httpx
import pytest

from portfolio_api.config import ClientConfig, Settings
from portfolio_api.datasources.github_adapter import GitHubAdapter
from portfolio_api.datasources.github_client import GitHubClient


class Upstream:
    """Canned GitHub responses plus a log of every request that reached the transport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responder = lambda request: httpx.Response(200, json={})

    def respond(self, status_code=200, payload=None, headers=None, text=None):
        def responder(request):
            if text is not None:
                return httpx.Response(status_code, text=text, headers=headers)
            return httpx.Response(status_code, content=json.dumps(payload).encode(), headers=headers)

        self.responder = responder

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)


@pytest.fixture
def upstream():
    return Upstream()


@pytest.fixture
def make_client(upstream):
    def _make(token="test-token"):
        config = ClientConfig(token=token, base_url="https://api.github.test")
        return GitHubClient(config, transport=httpx.MockTransport(upstream.handler))

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def adapter(client):
    return GitHubAdapter(client)


@pytest.fixture
def settings():
    return Settings(GITHUB_TOKEN="test-token", _env_file=None)
