"""Application service for pruning stale discussions."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from discussion_cleanup.config import CleanupInputs
from discussion_cleanup.domain.discussion import Discussion, DiscussionCategory
from discussion_cleanup.domain.eligibility import evaluate_discussion
from discussion_cleanup.domain.errors import CategoryNotFoundError
from discussion_cleanup.domain.repository import parse_target_repo
from discussion_cleanup.domain.title_template import compile_title_template
from discussion_cleanup.infrastructure.github_client import GitHubGraphQLClient

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def describe_failure(error: BaseException) -> str:
    """The user-facing message for a failed run."""
    return str(error) or type(error).__name__


@dataclass(frozen=True)
class CleanupResult:
    """Outcome of a run: a deletion count on success, a message on failure."""

    deleted_count: int = 0
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, deleted_count: int) -> "CleanupResult":
        return cls(deleted_count=deleted_count)

    @classmethod
    def failure(cls, message: str) -> "CleanupResult":
        return cls(error=message)


class DiscussionCleanupService:
    """Service deleting expired discussions whose titles match a template."""

    def __init__(
        self,
        load_inputs: Callable[[], CleanupInputs] = CleanupInputs.from_env,
        client_factory: Callable[[str], GitHubGraphQLClient] = GitHubGraphQLClient,
        clock: Callable[[], datetime] = _utcnow,
    ):
        """
        Initialize cleanup service.

        Args:
            load_inputs: Reads the action inputs; called once per run
            client_factory: Builds the GitHub API client from a token
            clock: Current time, timezone-aware
        """
        self.load_inputs = load_inputs
        self.client_factory = client_factory
        self.clock = clock

    def run(self) -> CleanupResult:
        """Run a cleanup pass. Never raises; failures are returned in the result."""
        try:
            deleted_count = self.cleanup_discussions()
        except Exception as e:
            logger.debug("Cleanup failed", exc_info=True)
            return CleanupResult.failure(describe_failure(e))
        return CleanupResult.success(deleted_count)

    def cleanup_discussions(self) -> int:
        """
        Delete eligible discussions, oldest first.

        Any failure, including one while deleting a single discussion, aborts
        the whole pass.

        Returns:
            Number of discussions deleted
        """
        inputs = self.load_inputs()
        target = parse_target_repo(inputs.target_repo, inputs.workflow_repository)

        cutoff = self.clock() - timedelta(hours=inputs.expiration_hours)
        logger.info(f"Expiration cutoff: {format_timestamp(cutoff)}")

        client = self.client_factory(inputs.github_token)
        matcher = compile_title_template(inputs.discussion_title_template)

        logger.info(
            f'Searching for discussions in {target.full_name} '
            f'category "{inputs.discussion_category_name}"'
        )
        category = self._find_category(
            client.list_discussion_categories(target.owner, target.repo),
            inputs.discussion_category_name,
        )
        logger.info(f"Found category ID: {category.id}")

        discussions = client.list_discussions(target.owner, target.repo, category.id)
        logger.info(f"Found {len(discussions)} discussions in category.")

        deleted_count = 0
        for discussion in discussions:
            verdict = evaluate_discussion(discussion, matcher, cutoff, inputs.cleanup_mode)
            if verdict.eligible:
                self._log_deletion(discussion)
                client.delete_discussion(discussion.id)
                deleted_count += 1
            else:
                logger.debug(
                    f'Skipping: "{discussion.title}" '
                    f"(Expired: {_flag(verdict.expired)}, Match: {_flag(verdict.matched)})"
                )

        logger.info(f"Deleted {deleted_count} discussions.")
        return deleted_count

    @staticmethod
    def _find_category(categories: list[DiscussionCategory], name: str) -> DiscussionCategory:
        for category in categories:
            if category.name == name:
                return category
        raise CategoryNotFoundError(name)

    @staticmethod
    def _log_deletion(discussion: Discussion) -> None:
        logger.info(
            f'Deleting expired discussion: "{discussion.title}" ({discussion.url}) '
            f"created at {format_timestamp(discussion.created_at)}"
        )


def _flag(value: bool) -> str:
    return "true" if value else "false"
