"""Strict-mode checks run on lines that fell back to plain text."""

import re


FIELD_MARKER = re.compile(r"(?:^|\s)(?:\|___\||___|__\*|__>|__\[\]|__\(\))")
STRAY_CLOSERS = {"]", "--]"}


def check_unbalanced_brackets(line: str) -> tuple[bool, str]:
    """Check that square brackets are balanced."""
    opened = line.count("[")
    closed = line.count("]")

    if opened != closed:
        return False, f"unbalanced brackets ({opened} '[' vs {closed} ']')"
    return True, "Brackets balanced"


def check_stray_closer(line: str) -> tuple[bool, str]:
    """Check that the line is not a closer with no open container of its kind."""
    if line.strip() in STRAY_CLOSERS:
        return False, f"closing delimiter '{line.strip()}' has no matching opener"
    return True, "No stray closer"


def check_dangling_field_marker(line: str) -> tuple[bool, str]:
    """Check that no field marker is left over on a line that is not a field."""
    match = FIELD_MARKER.search(line)
    if match:
        return False, f"field marker '{match.group(0).strip()}' without a valid field"
    return True, "No dangling field marker"


def check_malformed_image(line: str) -> tuple[bool, str]:
    """Check that a line starting like an image is a complete image."""
    if line.lstrip().startswith("!["):
        return False, "malformed image, expected ![alt](src)"
    return True, "Not an image"
