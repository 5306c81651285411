"""Errors raised while creating a session."""
from dataclasses import dataclass
from enum import Enum
from typing import List


class ErrorKind(str, Enum):
    """Kinds of session failures."""

    INVALID_ENDPOINT = "invalid_endpoint"
    CONNECTION_FAILED = "connection_failed"
    UNSUPPORTED_AUTH = "unsupported_auth"
    CERT_LOAD = "cert_load"
    AUTH_FAILED = "auth_failed"
    RESOLUTION_ERROR = "resolution_error"


class SessionError(Exception):
    """Base class for session failures."""

    kind: ErrorKind


class InvalidEndpointError(SessionError):
    kind = ErrorKind.INVALID_ENDPOINT


class ConnectionFailedError(SessionError):
    kind = ErrorKind.CONNECTION_FAILED


class UnsupportedAuthError(SessionError):
    kind = ErrorKind.UNSUPPORTED_AUTH


class CertLoadError(SessionError):
    kind = ErrorKind.CERT_LOAD


class AuthFailedError(SessionError):
    kind = ErrorKind.AUTH_FAILED


@dataclass
class ResolutionFailure:
    """One failed resource lookup."""

    resource: str
    path: str
    error: Exception

    def __str__(self) -> str:
        return str(self.error)


class ResolutionError(SessionError):
    """
    Aggregated resource lookup failures.

    Individual failures stay available in ``failures`` for inspection; the
    message joins them with newlines.
    """

    kind = ErrorKind.RESOLUTION_ERROR

    def __init__(self, failures: List[ResolutionFailure]):
        self.failures = list(failures)
        super().__init__("\n".join(str(failure) for failure in self.failures))

    @property
    def resources(self) -> List[str]:
        return [failure.resource for failure in self.failures]
