"""
Submission checks run before a fact is sent to the store.

Every predicate here is pure and returns a value instead of raising, so a
malformed input never interrupts the caller.
"""

from typing import List
from urllib.parse import urlsplit

from factfusion.categories import is_known_category


MAX_TEXT_LENGTH = 200
ALLOWED_SCHEMES = ("http", "https")


class ValidationFailure(ValueError):
    """A submission was rejected locally and never reached the store."""

    def __init__(self, problems: List[str]):
        super().__init__("; ".join(problems))
        self.problems = problems


def is_well_formed_source(source) -> bool:
    """True iff ``source`` is an absolute http or https URL with a host."""
    if not isinstance(source, str) or not source:
        return False
    try:
        parts = urlsplit(source)
        hostname = parts.hostname
        parts.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        return False
    if not hostname or any(c.isspace() for c in hostname):
        return False
    return parts.scheme.lower() in ALLOWED_SCHEMES


def remaining_characters(text: str) -> int:
    """Characters left before the text limit; negative once exceeded."""
    return MAX_TEXT_LENGTH - len(text or "")


def submission_problems(text, source, category) -> List[str]:
    """
    List every reason a submission would be rejected.

    All checks run regardless of earlier failures.
    """
    problems = []
    if not isinstance(text, str) or not text:
        problems.append("text is required")
    elif len(text) > MAX_TEXT_LENGTH:
        problems.append(f"text exceeds {MAX_TEXT_LENGTH} characters")
    if not is_well_formed_source(source):
        problems.append("source must be an http(s) URL")
    if not is_known_category(category):
        problems.append("category is not recognised")
    return problems


def is_submittable(text, source, category) -> bool:
    """True iff the fact may be sent to the store."""
    return not submission_problems(text, source, category)
