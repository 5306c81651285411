"""SDK endpoint URL parsing."""
from dataclasses import dataclass, replace
from typing import Optional
from urllib.parse import unquote, urlsplit

DEFAULT_PATH = "/sdk"
DEFAULT_PORTS = {"https": 443, "http": 80}


@dataclass(frozen=True)
class Endpoint:
    """A parsed vSphere SDK endpoint."""

    scheme: str
    host: str
    port: int
    path: str = DEFAULT_PATH
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def has_user(self) -> bool:
        return self.username is not None

    def without_user(self) -> "Endpoint":
        """Return a copy of this endpoint with the user info removed."""
        return replace(self, username=None, password=None)

    def __str__(self) -> str:
        userinfo = f"{self.username}@" if self.username else ""
        return f"{self.scheme}://{userinfo}{self.host}:{self.port}{self.path}"


def parse_url(service: str) -> Endpoint:
    """
    Parse an SDK URL into an Endpoint.

    A bare host ("vc.example.com") is accepted: the scheme defaults to https,
    the path to /sdk and the port to the scheme's well-known port.

    Args:
        service: URL string, optionally carrying "user:password@"

    Returns:
        Parsed endpoint

    Raises:
        ValueError: If the URL is empty, has no host, or has an invalid port
    """
    if not service or not service.strip():
        raise ValueError("empty URL")

    raw = service.strip()
    if "://" not in raw:
        raw = f"https://{raw}"

    parts = urlsplit(raw)
    scheme = parts.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise ValueError(f"unsupported scheme '{parts.scheme}'")

    if not parts.hostname:
        raise ValueError("missing host")

    # .port raises ValueError for non-numeric or out-of-range ports
    port = parts.port or DEFAULT_PORTS[scheme]

    username = unquote(parts.username) if parts.username is not None else None
    password = unquote(parts.password) if parts.password is not None else None

    return Endpoint(
        scheme=scheme,
        host=parts.hostname,
        port=port,
        path=parts.path or DEFAULT_PATH,
        username=username,
        password=password,
    )
