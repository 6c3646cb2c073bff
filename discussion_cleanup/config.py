"""Action inputs for a cleanup run."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from discussion_cleanup.domain.discussion import CleanupMode
from discussion_cleanup.domain.errors import InvalidFormatError
from discussion_cleanup.domain.repository import RepositoryRef
from discussion_cleanup.infrastructure.actions_toolkit import get_input

DEFAULT_EXPIRATION_HOURS = 168
DEFAULT_TITLE_TEMPLATE = "SWA access invite for @{login} ({swaName}) - {date}"


@dataclass(frozen=True)
class CleanupInputs:
    github_token: str
    discussion_category_name: str
    target_repo: str = ""
    expiration_hours: int = DEFAULT_EXPIRATION_HOURS
    discussion_title_template: str = DEFAULT_TITLE_TEMPLATE
    cleanup_mode: CleanupMode = CleanupMode.EXPIRATION
    workflow_repository: Optional[RepositoryRef] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "CleanupInputs":
        """
        Read the action inputs.

        Required inputs are checked first, in declaration order, so a missing
        token is reported before anything else.
        """
        if env is None:
            env = os.environ

        github_token = get_input("github-token", required=True, env=env)
        target_repo = get_input("target-repo", env=env)
        category_name = get_input("discussion-category-name", required=True, env=env)

        raw_hours = get_input("expiration-hours", env=env)
        expiration_hours = _parse_hours(raw_hours) if raw_hours else DEFAULT_EXPIRATION_HOURS

        title_template = get_input("discussion-title-template", env=env) or DEFAULT_TITLE_TEMPLATE

        raw_mode = get_input("cleanup-mode", env=env)
        cleanup_mode = CleanupMode.parse(raw_mode) if raw_mode else CleanupMode.EXPIRATION

        return cls(
            github_token=github_token,
            discussion_category_name=category_name,
            target_repo=target_repo,
            expiration_hours=expiration_hours,
            discussion_title_template=title_template,
            cleanup_mode=cleanup_mode,
            workflow_repository=workflow_repository(env),
        )


def _parse_hours(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise InvalidFormatError(f"Invalid expiration-hours value: {value}") from None


def workflow_repository(env: Mapping[str, str]) -> Optional[RepositoryRef]:
    """The repository the workflow runs in, from GITHUB_REPOSITORY."""
    owner, _, repo = env.get("GITHUB_REPOSITORY", "").partition("/")
    if not owner or not repo:
        return None
    return RepositoryRef(owner=owner, repo=repo)
