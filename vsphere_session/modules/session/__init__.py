"""
Session Module - Black Box Interface

Purpose: Cache resolved vSphere objects for one connection
Interface: new_session(), Session.create(), connect(), populate(), logout()
Hidden: URL handling, login mode selection, error aggregation
"""

from .errors import (
    AuthFailedError,
    CertLoadError,
    ConnectionFailedError,
    ErrorKind,
    InvalidEndpointError,
    ResolutionError,
    ResolutionFailure,
    SessionError,
    UnsupportedAuthError,
)
from .session import Session, new_session

__all__ = [
    "Session",
    "new_session",
    "ErrorKind",
    "SessionError",
    "InvalidEndpointError",
    "ConnectionFailedError",
    "UnsupportedAuthError",
    "CertLoadError",
    "AuthFailedError",
    "ResolutionError",
    "ResolutionFailure",
]
