from __future__ import annotations

"""Exception hierarchy for the MAP score service.

The numeric engines never raise for caller input; every out-of-range value
is clamped. The only failures are bad reference data, detected when tables
are built, and malformed requests at the service boundary.
"""

from typing import Any

__all__ = [
    "DomainError",
    "ValidationError",
    "InvalidReferenceData",
    "ConfigurationError",
]


class DomainError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 400
    error_code: str = "domain_error"
    default_message: str = "Domain error"

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        final_message = message or self.default_message
        super().__init__(final_message)
        self.message = final_message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code


class ValidationError(DomainError, ValueError):
    """Raised when a caller supplies an unusable combination of inputs."""

    error_code = "validation_error"
    default_message = "Invalid input"
    status_code = 400


class InvalidReferenceData(DomainError):
    """Raised when a percentile table or grade-equivalent curve is malformed.

    Detected while the table is constructed so that bad data aborts startup
    instead of producing wrong percentiles later.
    """

    error_code = "invalid_reference_data"
    status_code = 500
    default_message = "Reference table is invalid"


class ConfigurationError(DomainError):
    """Raised when a parameters or override file cannot be read."""

    error_code = "configuration_error"
    status_code = 500
    default_message = "Server configuration is invalid"
