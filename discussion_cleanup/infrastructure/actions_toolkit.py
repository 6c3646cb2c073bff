"""Minimal GitHub Actions runtime helpers."""

import os
import sys
import uuid
from typing import Mapping, Optional

from discussion_cleanup.domain.errors import MissingConfigurationError


def _input_variable(name: str) -> str:
    return f"INPUT_{name.replace(' ', '_').upper()}"


def get_input(name: str, required: bool = False, env: Optional[Mapping[str, str]] = None) -> str:
    """
    Read an action input from the environment.

    Args:
        name: Input name as declared in action.yml (e.g. ``github-token``)
        required: Fail when the input is missing or empty
        env: Environment mapping. If None, uses os.environ.

    Returns:
        The whitespace-trimmed value, or an empty string

    Raises:
        MissingConfigurationError: If a required input is not supplied
    """
    if env is None:
        env = os.environ

    value = env.get(_input_variable(name), "").strip()
    if required and not value:
        raise MissingConfigurationError(f"Input required and not supplied: {name}")
    return value


def set_output(name: str, value: object, env: Optional[Mapping[str, str]] = None) -> None:
    """Publish a step output through the GITHUB_OUTPUT file."""
    if env is None:
        env = os.environ

    output_path = env.get("GITHUB_OUTPUT")
    if not output_path:
        # Runners without GITHUB_OUTPUT only understand the legacy command.
        sys.stdout.write(f"::set-output name={name}::{value}\n")
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_path, "a", encoding="utf-8") as f:
        f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


def set_failed(message: str) -> int:
    """
    Report a failed run to the workflow.

    Returns:
        The process exit code to use
    """
    sys.stdout.write(f"::error::{_escape_data(message)}\n")
    return 1


def _escape_data(message: str) -> str:
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def is_debug(env: Optional[Mapping[str, str]] = None) -> bool:
    """Whether step debug logging is enabled for the run."""
    if env is None:
        env = os.environ
    return env.get("RUNNER_DEBUG") == "1"
