"""Domain validators. Pure validation functions."""

from app.domain.validators.rules import validate_date_range, validate_deadline, validate_search_term

__all__ = [
    "validate_date_range",
    "validate_deadline",
    "validate_search_term",
]
