"""Custom exceptions shared across the proxy."""

from dataclasses import dataclass


@dataclass(eq=False)
class ServiceError(Exception):
    """Base exception for failures surfaced to API callers."""

    message: str
    code: str = "service_error"
    status_code: int = 500

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass(eq=False)
class InvalidRequestError(ServiceError):
    """Raised for requests rejected before any upstream call."""

    code: str = "invalid_request"
    status_code: int = 400


@dataclass(eq=False)
class UpstreamRetryableError(ServiceError):
    """Transient upstream condition, consumed by the retry loop."""

    code: str = "upstream_retryable"
    status_code: int = 503


@dataclass(eq=False)
class UpstreamFatalError(ServiceError):
    """Raised when the upstream response must not be retried."""

    code: str = "upstream_fatal"
    status_code: int = 500


@dataclass(eq=False)
class UpstreamExhaustedError(ServiceError):
    """Raised when every attempt ended in a retryable condition."""

    code: str = "upstream_exhausted"
    status_code: int = 503
