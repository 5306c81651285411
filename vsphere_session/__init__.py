"""
vsphere-session - cached vSphere inventory objects

Connects to a vCenter or ESXi SDK endpoint and resolves the datacenter,
cluster, datastore, host, network and resource pool a caller works with,
so they are looked up once per session.

Modules:
- client: SDK endpoint parsing, connection, login, keep-alive
- finder: Inventory path resolution with default selection
- session: Connect + populate as one atomic operation
"""

from .config import Config, EnvConfigProvider, FileConfigProvider
from .modules.session import (
    AuthFailedError,
    CertLoadError,
    ConnectionFailedError,
    ErrorKind,
    InvalidEndpointError,
    ResolutionError,
    Session,
    SessionError,
    UnsupportedAuthError,
    new_session,
)

__version__ = "1.0.0"

__all__ = [
    "Config",
    "EnvConfigProvider",
    "FileConfigProvider",
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
]
