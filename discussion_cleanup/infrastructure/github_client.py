"""GitHub GraphQL API client for discussions."""

import logging
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from discussion_cleanup.domain.discussion import Discussion, DiscussionCategory

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when a GitHub API call fails."""
    pass


def parse_github_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class GitHubGraphQLClient:
    """Client for the discussion queries and mutations of the GitHub GraphQL API."""

    # Only the first page is ever requested; 100 is the GraphQL maximum.
    DEFAULT_ENDPOINT = "https://api.github.com/graphql"
    PAGE_SIZE = 100
    REQUEST_TIMEOUT_SECONDS = 30

    CATEGORIES_QUERY = """
    query($owner: String!, $repo: String!, $first: Int!) {
        repository(owner: $owner, name: $repo) {
            discussionCategories(first: $first) {
                nodes {
                    id
                    name
                }
            }
        }
    }
    """

    DISCUSSIONS_QUERY = """
    query($owner: String!, $repo: String!, $categoryId: ID!, $first: Int!) {
        repository(owner: $owner, name: $repo) {
            discussions(first: $first, categoryId: $categoryId, orderBy: {field: CREATED_AT, direction: ASC}) {
                nodes {
                    id
                    title
                    createdAt
                    url
                }
            }
        }
    }
    """

    DELETE_DISCUSSION_MUTATION = """
    mutation($id: ID!) {
        deleteDiscussion(input: {id: $id}) {
            clientMutationId
        }
    }
    """

    def __init__(self, token: str, endpoint: Optional[str] = None):
        """
        Initialize GitHub GraphQL client.

        Args:
            token: GitHub token with permission to manage discussions.
            endpoint: GraphQL endpoint. If None, uses GITHUB_GRAPHQL_URL env var
                (set by Actions runners, also on GitHub Enterprise Server) or
                the public API.
        """
        if endpoint is None:
            endpoint = os.getenv("GITHUB_GRAPHQL_URL") or self.DEFAULT_ENDPOINT

        self.endpoint = endpoint
        self.headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }

    def _execute_query(self, query: str, variables: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Execute a GraphQL query or mutation.

        Args:
            query: GraphQL document
            variables: Query variables

        Returns:
            GraphQL response data

        Raises:
            GitHubAPIError: If the request fails or the response carries errors
        """
        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = requests.post(
                self.endpoint,
                json=payload,
                headers=self.headers,
                timeout=self.REQUEST_TIMEOUT_SECONDS,
            )
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError(f"Request to GitHub failed: {e}") from e

        if response.status_code == 401:
            raise GitHubAPIError("Authentication failed. Check your GitHub token.")
        if response.status_code == 403:
            raise GitHubAPIError(f"Forbidden: {response.text}")
        if response.status_code != 200:
            raise GitHubAPIError(f"GitHub API returned {response.status_code}: {response.text}")

        data = response.json()
        if data.get("errors"):
            error_messages = [err.get("message", "") for err in data["errors"]]
            raise GitHubAPIError(f"GraphQL errors: {error_messages}")

        return data.get("data") or {}

    def _repository_field(self, data: Dict[str, Any], owner: str, repo: str) -> Dict[str, Any]:
        repository = data.get("repository")
        if repository is None:
            raise GitHubAPIError(f"Repository {owner}/{repo} not found")
        return repository

    def list_discussion_categories(self, owner: str, repo: str) -> List[DiscussionCategory]:
        """Fetch the first page of discussion categories of a repository."""
        variables = {"owner": owner, "repo": repo, "first": self.PAGE_SIZE}
        data = self._execute_query(self.CATEGORIES_QUERY, variables)

        nodes = self._repository_field(data, owner, repo)["discussionCategories"]["nodes"]
        return [DiscussionCategory(id=node["id"], name=node["name"]) for node in nodes]

    def list_discussions(self, owner: str, repo: str, category_id: str) -> List[Discussion]:
        """
        Fetch the first page of discussions in a category.

        Args:
            owner: Repository owner
            repo: Repository name
            category_id: Node ID of the discussion category

        Returns:
            Discussions ordered by creation time, oldest first
        """
        variables = {
            "owner": owner,
            "repo": repo,
            "categoryId": category_id,
            "first": self.PAGE_SIZE,
        }
        data = self._execute_query(self.DISCUSSIONS_QUERY, variables)

        nodes = self._repository_field(data, owner, repo)["discussions"]["nodes"]
        return [
            Discussion(
                id=node["id"],
                title=node["title"],
                created_at=parse_github_datetime(node["createdAt"]),
                url=node["url"],
            )
            for node in nodes
        ]

    def delete_discussion(self, discussion_id: str) -> None:
        """Delete a discussion by node ID."""
        self._execute_query(self.DELETE_DISCUSSION_MUTATION, {"id": discussion_id})
        logger.debug(f"Deleted discussion {discussion_id}")
