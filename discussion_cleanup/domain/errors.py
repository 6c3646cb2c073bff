"""Errors that abort a discussion cleanup run."""


class DiscussionCleanupError(Exception):
    """Base class for fatal cleanup failures."""
    pass


class MissingConfigurationError(DiscussionCleanupError):
    """Raised when a required action input is not supplied."""
    pass


class InvalidFormatError(DiscussionCleanupError):
    """Raised when an input value cannot be parsed."""
    pass


class CategoryNotFoundError(DiscussionCleanupError):
    """Raised when the repository has no discussion category with the configured name."""

    def __init__(self, category_name: str):
        super().__init__(f'Category "{category_name}" not found.')
        self.category_name = category_name
