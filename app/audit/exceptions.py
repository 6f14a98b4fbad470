"""Audit-layer exceptions. Typed, no HTTP."""


class AuditError(Exception):
    """Raised when the audit store cannot be written to or read from. Always chained to the cause."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
