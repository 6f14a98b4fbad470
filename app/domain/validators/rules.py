"""Validators for domain rules. Pure functions, no infrastructure or DB access."""

from datetime import date, datetime
from typing import Optional, Union

from app.domain.exceptions import DomainValidationError

DateLike = Union[date, datetime]


def validate_date_range(start: DateLike, end: DateLike) -> None:
    """Inclusive ranges only make sense when start <= end. Raises DomainValidationError otherwise."""
    if start > end:
        raise DomainValidationError(
            f"start ({start.isoformat()}) must not be after end ({end.isoformat()})"
        )


def validate_deadline(deadline: date, today: date) -> None:
    """A new project's deadline must not already have passed."""
    if deadline < today:
        raise DomainValidationError(
            f"deadline must be today or later, got {deadline.isoformat()}"
        )


def validate_search_term(term: Optional[str]) -> str:
    """Return the stripped search term; empty terms are rejected."""
    if term is None or not term.strip():
        raise DomainValidationError("search term must not be empty")
    return term.strip()
