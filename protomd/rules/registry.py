"""Registry of strict-mode line check functions."""

from typing import Callable
from .checks import (
    check_unbalanced_brackets,
    check_stray_closer,
    check_dangling_field_marker,
    check_malformed_image,
)


CHECK_REGISTRY: dict[str, Callable[[str], tuple[bool, str]]] = {
    "unbalanced_brackets": check_unbalanced_brackets,
    "stray_closer": check_stray_closer,
    "dangling_field_marker": check_dangling_field_marker,
    "malformed_image": check_malformed_image,
}


def get_check(check_id: str) -> Callable | None:
    """Get a check function by ID."""
    return CHECK_REGISTRY.get(check_id)


def register_check(check_id: str, check_fn: Callable[[str], tuple[bool, str]]) -> None:
    """Register a new check function."""
    CHECK_REGISTRY[check_id] = check_fn


def list_checks() -> list[str]:
    """List all registered check IDs."""
    return list(CHECK_REGISTRY.keys())


def run_checks(line: str, check_ids: list[str] | None = None) -> list[str]:
    """Run checks against a line and return the failure messages.

    Unknown IDs in check_ids are skipped.
    """
    failures = []
    for check_id in check_ids if check_ids is not None else list_checks():
        check_fn = get_check(check_id)
        if check_fn is None:
            continue
        passed, message = check_fn(line)
        if not passed:
            failures.append(message)
    return failures
