"""Deletion eligibility rules for discussions."""

from dataclasses import dataclass
from datetime import datetime

from discussion_cleanup.domain.discussion import CleanupMode, Discussion
from discussion_cleanup.domain.title_template import TitleMatcher


@dataclass(frozen=True)
class EligibilityVerdict:
    """Outcome of evaluating one discussion, with both sub-judgments."""

    expired: bool
    matched: bool

    @property
    def eligible(self) -> bool:
        return self.expired and self.matched


def evaluate_discussion(
    discussion: Discussion,
    matcher: TitleMatcher,
    cutoff: datetime,
    mode: CleanupMode,
) -> EligibilityVerdict:
    """
    Decide whether a discussion should be deleted.

    In immediate mode every discussion counts as expired. Otherwise a
    discussion is expired only when it was created strictly before ``cutoff``.
    """
    if mode is CleanupMode.IMMEDIATE:
        expired = True
    else:
        expired = discussion.created_at < cutoff
    matched = matcher.matches(discussion.title)
    return EligibilityVerdict(expired=expired, matched=matched)


def should_delete_discussion(
    discussion: Discussion,
    matcher: TitleMatcher,
    cutoff: datetime,
    mode: CleanupMode,
) -> bool:
    return evaluate_discussion(discussion, matcher, cutoff, mode).eligible
