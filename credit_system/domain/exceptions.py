"""Domain-specific exceptions"""

from typing import Dict


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class NotFoundError(DomainException):
    """Requested customer or credit does not exist"""

    pass


class InvariantViolationError(DomainException, ValueError):
    """Data reached the domain in a state that correct callers never produce"""

    pass


class DomainValidationError(DomainException):
    """One or more fields failed validation"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{field}: {message}" for field, message in errors.items()))
