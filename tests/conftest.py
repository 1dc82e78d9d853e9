"""Shared test fixtures for forgesites."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from forgesites.api.client import ForgeClient
from forgesites.api.models import Site


@pytest.fixture
def mock_client():
    """A ForgeClient with mocked HTTP methods."""
    client = ForgeClient("test-api-key")
    client.get = AsyncMock()
    client.post = AsyncMock(return_value={})
    client.put = AsyncMock(return_value={})
    client.delete = AsyncMock(return_value={})
    return client


@pytest.fixture
def site_response():
    """Builds raw site API data, with optional overrides."""
    def _build(**replace):
        data = {
            "id": 1,
            "name": "example.org",
            "directory": "/public",
            "wildcards": False,
            "status": "installing",
            "repository": None,
            "repository_provider": None,
            "repository_branch": None,
            "repository_status": None,
            "quick_deploy": False,
            "project_type": "php",
            "app": None,
            "app_status": None,
            "hipchat_room": None,
            "slack_channel": None,
            "created_at": "2016-12-16 16:38:08",
        }
        data.update(replace)
        return data
    return _build


@pytest.fixture
def sample_site_data(site_response):
    """Raw site API response data."""
    return site_response()


@pytest.fixture
def sample_site(mock_client, sample_site_data):
    """A site bound to the mocked client on server 1."""
    return Site.from_api(mock_client, 1, sample_site_data)
