"""Unit tests for GitHubGraphQLClient."""

from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
import requests

from discussion_cleanup.domain.discussion import Discussion, DiscussionCategory
from discussion_cleanup.infrastructure.github_client import GitHubAPIError, GitHubGraphQLClient


def _response(status_code=200, payload=None, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload or {}
    response.text = text
    return response


@pytest.fixture
def client(monkeypatch):
    monkeypatch.delenv("GITHUB_GRAPHQL_URL", raising=False)
    return GitHubGraphQLClient(token="test-token")


class TestInit:
    def test_default_endpoint_and_auth(self, client):
        assert client.endpoint == "https://api.github.com/graphql"
        assert client.headers["Authorization"] == "Bearer test-token"

    def test_endpoint_from_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_GRAPHQL_URL", "https://ghe.example.com/api/graphql")
        assert GitHubGraphQLClient(token="t").endpoint == "https://ghe.example.com/api/graphql"


class TestListDiscussionCategories:
    def test_parses_nodes(self, client):
        payload = {"data": {"repository": {"discussionCategories": {"nodes": [
            {"id": "cat-1", "name": "Announcements"},
            {"id": "cat-2", "name": "General"},
        ]}}}}
        with patch("requests.post", return_value=_response(payload=payload)) as post:
            categories = client.list_discussion_categories("owner", "repo")

        assert categories == [
            DiscussionCategory(id="cat-1", name="Announcements"),
            DiscussionCategory(id="cat-2", name="General"),
        ]
        sent = post.call_args.kwargs["json"]
        assert sent["variables"] == {"owner": "owner", "repo": "repo", "first": 100}
        assert post.call_args.kwargs["timeout"] == 30

    def test_missing_repository(self, client):
        payload = {"data": {"repository": None}}
        with patch("requests.post", return_value=_response(payload=payload)):
            with pytest.raises(GitHubAPIError, match="owner/repo not found"):
                client.list_discussion_categories("owner", "repo")


class TestListDiscussions:
    def test_parses_nodes_in_order(self, client):
        payload = {"data": {"repository": {"discussions": {"nodes": [
            {"id": "d-1", "title": "first", "createdAt": "2024-01-01T00:00:00Z",
             "url": "https://github.com/owner/repo/discussions/1"},
            {"id": "d-2", "title": "second", "createdAt": "2024-01-09T12:30:00Z",
             "url": "https://github.com/owner/repo/discussions/2"},
        ]}}}}
        with patch("requests.post", return_value=_response(payload=payload)) as post:
            discussions = client.list_discussions("owner", "repo", "cat-1")

        assert discussions[0] == Discussion(
            id="d-1",
            title="first",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
            url="https://github.com/owner/repo/discussions/1",
        )
        assert discussions[1].created_at == datetime(2024, 1, 9, 12, 30, tzinfo=timezone.utc)

        sent = post.call_args.kwargs["json"]
        assert sent["variables"]["categoryId"] == "cat-1"
        assert "direction: ASC" in sent["query"]


class TestDeleteDiscussion:
    def test_sends_mutation(self, client):
        payload = {"data": {"deleteDiscussion": {"clientMutationId": None}}}
        with patch("requests.post", return_value=_response(payload=payload)) as post:
            client.delete_discussion("d-1")

        sent = post.call_args.kwargs["json"]
        assert "deleteDiscussion" in sent["query"]
        assert sent["variables"] == {"id": "d-1"}


class TestErrors:
    def test_graphql_errors(self, client):
        payload = {"errors": [{"message": "Could not resolve to a node"}]}
        with patch("requests.post", return_value=_response(payload=payload)):
            with pytest.raises(GitHubAPIError, match="Could not resolve to a node"):
                client.delete_discussion("missing")

    def test_unauthorized(self, client):
        with patch("requests.post", return_value=_response(status_code=401)):
            with pytest.raises(GitHubAPIError, match="Authentication failed"):
                client.list_discussion_categories("owner", "repo")

    def test_server_error(self, client):
        with patch("requests.post", return_value=_response(status_code=502, text="Bad gateway")):
            with pytest.raises(GitHubAPIError, match="502"):
                client.list_discussion_categories("owner", "repo")

    def test_transport_error_is_not_retried(self, client):
        with patch("requests.post", side_effect=requests.exceptions.ConnectionError("boom")) as post:
            with pytest.raises(GitHubAPIError, match="boom"):
                client.list_discussion_categories("owner", "repo")
        assert post.call_count == 1
