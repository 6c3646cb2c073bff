#!/usr/bin/env python3
"""Script to delete stale auto-generated GitHub discussions."""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from discussion_cleanup.application.cleanup_service import DiscussionCleanupService
from discussion_cleanup.infrastructure.actions_toolkit import is_debug, set_failed, set_output

logger = logging.getLogger(__name__)


def configure_logging():
    """Log to stdout; debug lines only when step debug logging is on."""
    logging.basicConfig(
        level=logging.DEBUG if is_debug() else logging.INFO,
        format='%(message)s',
        stream=sys.stdout,
    )
    # Keep request-level noise out of the job log
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(service=None):
    """Run the cleanup and report the result to the workflow."""
    if service is None:
        service = DiscussionCleanupService()

    result = service.run()
    if not result.succeeded:
        logger.error(f"Cleanup failed: {result.error}")
        return set_failed(result.error)

    set_output("deleted-count", result.deleted_count)
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(main())
