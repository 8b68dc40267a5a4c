class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class PolicyStoreError(DomainError):
    """Raised when the scoring policy cannot be loaded from or saved to storage."""
