"""
Router tests for GET /matches.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from rift_profile.core.exceptions import UpstreamUnavailableError, ValidationError
from rift_profile.core.riot_api import UpstreamError
from rift_profile.features.matches.dependencies import get_match_window_fetcher
from rift_profile.features.matches.models import MatchWindow
from rift_profile.features.matches.service import MatchWindowFetcher
from rift_profile.main import app


@pytest.fixture
def mock_fetcher():
    return AsyncMock(spec=MatchWindowFetcher)


@pytest.fixture
def client(mock_fetcher):
    app.dependency_overrides[get_match_window_fetcher] = lambda: mock_fetcher
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_match_window(client, mock_fetcher, make_match):
    mock_fetcher.fetch_window.return_value = MatchWindow(
        matches=[make_match("NA1_2"), make_match("NA1_1")],
        has_more=False,
        next_start=22,
    )

    response = client.get("/matches", params={"puuid": "puuid-1", "start": 20, "count": 20})

    assert response.status_code == 200
    body = response.json()
    assert [m["match_id"] for m in body["matches"]] == ["NA1_2", "NA1_1"]
    assert body["has_more"] is False
    assert body["next_start"] == 22
    mock_fetcher.fetch_window.assert_awaited_once_with("puuid-1", 20, 20)


def test_match_window_defaults(client, mock_fetcher):
    mock_fetcher.fetch_window.return_value = MatchWindow(
        matches=[], has_more=False, next_start=20
    )

    client.get("/matches", params={"puuid": "puuid-1"})

    mock_fetcher.fetch_window.assert_awaited_once_with("puuid-1", 20, 20)


def test_match_window_validation_error(client, mock_fetcher):
    mock_fetcher.fetch_window.side_effect = ValidationError(
        "puuid parameter is required", field="puuid"
    )

    response = client.get("/matches")

    assert response.status_code == 400
    assert "puuid" in response.json()["detail"]


def test_match_window_upstream_failure(client, mock_fetcher):
    mock_fetcher.fetch_window.side_effect = UpstreamError(
        "Upstream returned 500", status_code=500
    )

    response = client.get("/matches", params={"puuid": "puuid-1"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to fetch matches"


def test_match_window_deadline_exceeded(client, mock_fetcher):
    mock_fetcher.fetch_window.side_effect = UpstreamUnavailableError(
        "match window exceeded 30.0s",
        service="MatchWindowFetcher",
        operation="fetch_window",
    )

    response = client.get("/matches", params={"puuid": "puuid-1"})

    assert response.status_code == 502
    assert response.json()["detail"] == "Failed to fetch matches"
