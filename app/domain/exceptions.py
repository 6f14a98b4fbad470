"""Domain-specific exceptions. Pure domain layer, no infrastructure."""


class DomainError(Exception):
    """Base for all domain-layer errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DomainValidationError(DomainError):
    """Raised when domain validation rules are violated."""


class EntityNotFoundError(DomainError):
    """Raised when a referenced project, developer or task does not exist."""

    def __init__(self, entity_type: str, entity_id) -> None:
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found with id: {entity_id}")


class DuplicateEntityError(DomainError):
    """Raised when a uniqueness rule (project name, developer email) would be broken."""


class BusinessRuleViolationError(DomainError):
    """Raised when a request is well-formed but not allowed by business rules."""


class TaskAssignmentError(DomainError):
    """Raised when a task cannot be assigned or unassigned in its current state."""
