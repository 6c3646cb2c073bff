"""Repository references and target-repo parsing."""

from dataclasses import dataclass
from typing import Optional

from discussion_cleanup.domain.errors import InvalidFormatError, MissingConfigurationError


@dataclass(frozen=True)
class RepositoryRef:
    """Immutable owner/name pair identifying a repository."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


def parse_target_repo(value: Optional[str], default: Optional[RepositoryRef]) -> RepositoryRef:
    """
    Resolve an ``owner/repo`` string into a repository reference.

    Args:
        value: The ``owner/repo`` string. Absent or empty selects ``default``.
        default: Repository the workflow runs in, if known.

    Returns:
        The resolved repository reference.

    Raises:
        InvalidFormatError: If ``value`` is not exactly two non-empty segments.
        MissingConfigurationError: If ``value`` is empty and no default is known.
    """
    if not value:
        if default is None:
            raise MissingConfigurationError(
                "context.repo requires a GITHUB_REPOSITORY environment variable like 'owner/repo'"
            )
        return default

    owner, _, repo = value.partition("/")
    if not owner or not repo or "/" in repo:
        raise InvalidFormatError(f"Invalid target-repo format: {value}")

    return RepositoryRef(owner=owner, repo=repo)
