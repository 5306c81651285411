"""
vSphere SDK client.

Thin wrapper around a pyVmomi SOAP stub and its ServiceInstance, exposing the
handful of calls a session needs: connect, API type detection, login by
password or certificate, keep-alive installation and logout.
"""

import logging
import ssl
from typing import Callable, Optional

from pyVim.connect import SmartStubAdapter
from pyVmomi import vim

from .keepalive import KeepAlive
from .url import Endpoint

logger = logging.getLogger(__name__)

VIRTUAL_CENTER_API = "VirtualCenter"


def build_ssl_context(insecure: bool = False) -> ssl.SSLContext:
    """Create the TLS context used to talk to the SDK endpoint."""
    context = ssl.create_default_context()
    if insecure:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def load_key_pair(context: ssl.SSLContext, cert_file: str, key_file: str) -> ssl.SSLContext:
    """
    Load a client certificate and private key into a TLS context.

    Raises:
        OSError: If either file cannot be read
        ssl.SSLError: If the files do not hold a matching key pair
    """
    context.load_cert_chain(certfile=cert_file, keyfile=key_file)
    return context


def _service_instance(stub):
    return vim.ServiceInstance("ServiceInstance", stub)


class Client:
    """Connection to a vSphere SDK endpoint."""

    def __init__(self, stub, endpoint: Endpoint):
        self.stub = stub
        self.endpoint = endpoint
        self.service_instance = _service_instance(stub)
        self._content = None
        self._logged_out = False

    @classmethod
    def connect(
        cls,
        endpoint: Endpoint,
        ssl_context: ssl.SSLContext,
        timeout: Optional[float] = None,
    ) -> "Client":
        """
        Open an unauthenticated connection to the endpoint.

        Args:
            endpoint: SDK endpoint without user info
            ssl_context: TLS context, optionally holding a client certificate
            timeout: HTTP connection timeout in seconds

        Returns:
            Connected client (not yet logged in)
        """
        logger.debug(f"Connecting to {endpoint}")
        # pyVmomi selects plain HTTP by a negative port
        port = -endpoint.port if endpoint.scheme == "http" else endpoint.port
        stub = SmartStubAdapter(
            host=endpoint.host,
            port=port,
            path=endpoint.path,
            sslContext=ssl_context,
            httpConnectionTimeout=timeout,
        )
        return cls(stub, endpoint)

    @property
    def content(self):
        """The ServiceContent of this connection."""
        if self._logged_out:
            raise RuntimeError(f"client for {self.endpoint} has been logged out")
        if self._content is None:
            self._content = self.service_instance.RetrieveContent()
        return self._content

    @property
    def logged_out(self) -> bool:
        return self._logged_out

    def is_vc(self) -> bool:
        """Return whether the endpoint is a vCenter rather than a standalone host."""
        return self.content.about.apiType == VIRTUAL_CENTER_API

    def install_keepalive(
        self, interval: float, handler: Optional[Callable[[], None]] = None
    ) -> KeepAlive:
        """
        Wrap the stub with a keep-alive decorator.

        Must be called before logging in: the keep-alive thread is started
        by the login call travelling through the wrapper.
        """
        keepalive = KeepAlive(self.stub, interval, handler)
        self.stub = keepalive
        self.service_instance = _service_instance(keepalive)
        self._content = None
        logger.debug(f"Keep-alive installed for {self.endpoint} ({interval}s)")
        return keepalive

    def login(self, username: Optional[str], password: Optional[str]):
        """Log in with username and password."""
        return self.content.sessionManager.Login(userName=username or "", password=password or "")

    def login_extension_by_certificate(self, extension_key: Optional[str], locale: Optional[str] = None):
        """Log in as an extension authenticated by the client certificate."""
        return self.content.sessionManager.LoginExtensionByCertificate(
            extensionKey=extension_key or "", locale=locale
        )

    def close(self) -> None:
        """Stop any keep-alive and drop the stub's pooled connections."""
        if isinstance(self.stub, KeepAlive):
            self.stub.stop()
        self.stub.DropConnections()

    def logout(self) -> None:
        """Terminate the server session; the client is unusable afterwards."""
        if self._logged_out:
            return

        try:
            self.content.sessionManager.Logout()
        finally:
            self.close()
            self._logged_out = True
            self._content = None
        logger.info(f"Logged out of {self.endpoint}")
