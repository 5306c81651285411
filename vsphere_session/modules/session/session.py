"""
Session caches vSphere objects to avoid repeated SDK lookups.

To obtain a Session, call create() on new_session(config). The config holds
the SDK URL (service) and the desired vSphere resources. create() connects
to the service and stores the managed object for each resource in Config;
callers then use the cached attributes of the Session instead of querying
the SDK themselves.
"""

import logging
import ssl
from typing import Callable, List, Optional

from pyVmomi import vmodl

from ...config.provider import Config
from ...logging_config import redact_credentials
from ..client import Client, Endpoint, build_ssl_context, load_key_pair, parse_url
from ..finder import DefaultMultipleFoundError, Finder
from .errors import (
    AuthFailedError,
    CertLoadError,
    ConnectionFailedError,
    InvalidEndpointError,
    ResolutionError,
    ResolutionFailure,
    UnsupportedAuthError,
)

logger = logging.getLogger(__name__)

VSAN_FILESYSTEM_TYPE = "vsan"
RESOURCES = ("datacenter", "cluster", "datastore", "host", "network", "pool")


class Session:
    """Cached vSphere objects for one authenticated connection."""

    def __init__(self, config: Config):
        self.config = config
        self.client: Optional[Client] = None
        self.finder: Optional[Finder] = None

        self.datacenter = None
        self.cluster = None
        self.datastore = None
        self.host = None
        self.network = None
        self.pool = None

    def __enter__(self) -> "Session":
        return self.create()

    def __exit__(self, exc_type, exc, tb) -> None:
        if self.client is not None:
            self.logout()

    def vim25(self):
        """Return the underlying vim.ServiceInstance."""
        return self._require_client().service_instance

    def is_vc(self) -> bool:
        """Return whether the session is backed by vCenter."""
        return self._require_client().is_vc()

    def is_vsan(self) -> bool:
        """Return whether the session datastore is backed by vSAN."""
        if self.datastore is None:
            return False
        try:
            return self.datastore.summary.type == VSAN_FILESYSTEM_TYPE
        except vmodl.MethodFault as e:
            logger.debug(f"Unable to read datastore type: {e}")
            return False

    def create(self) -> "Session":
        """
        Connect and populate as one atomic step.

        Connect errors propagate unchanged. If populate fails, the freshly
        authenticated client is logged out before the error is re-raised.
        """
        self.connect()

        try:
            return self.populate()
        except Exception:
            self._logout_after_failure()
            raise

    def connect(self) -> "Session":
        """
        Establish and authenticate the connection, without resolving resources.

        Raises:
            InvalidEndpointError: The service URL could not be parsed
            ConnectionFailedError: The endpoint could not be reached
            UnsupportedAuthError: Certificate auth requested against ESXi
            CertLoadError: The certificate/key pair could not be loaded
            AuthFailedError: Login was rejected
        """
        config = self.config
        try:
            url = parse_url(config.service)
        except ValueError as e:
            raise InvalidEndpointError(
                f"SDK URL ({redact_credentials(config.service)}) could not be parsed: {e}"
            ) from e

        # The keep-alive has to be installed before login, so connect
        # without user info first and log in explicitly afterwards.
        endpoint = url.without_user()

        client = self._open(endpoint, build_ssl_context(config.insecure))

        try:
            if config.has_certificate:
                if not self._check(client.is_vc, endpoint):
                    raise UnsupportedAuthError("Certificate based authentication not yet supported with ESXi")

                try:
                    context = load_key_pair(build_ssl_context(config.insecure), config.cert_file, config.key_file)
                except (OSError, ssl.SSLError) as e:
                    raise CertLoadError(
                        f"Unable to load X509 key pair({config.cert_file},{config.key_file}): {e}"
                    ) from e

                cert_client = self._open(endpoint, context)
                self._close(client)
                client = cert_client

            keepalive = config.keepalive.total_seconds()
            if keepalive > 0:
                client.install_keepalive(keepalive)

            try:
                if config.has_certificate:
                    client.login_extension_by_certificate(url.username)
                else:
                    client.login(url.username, url.password)
            except Exception as e:
                raise AuthFailedError(f"Failed to log in to {endpoint}: {e}") from e
        except Exception:
            self._close(client)
            raise

        self.client = client
        self.finder = Finder(client.service_instance)
        logger.info(f"Connected to {endpoint}")
        return self

    def populate(self) -> "Session":
        """
        Resolve the configured resources.

        Every lookup is attempted; failures are collected and raised together
        as a ResolutionError, in which case no resource attribute is set.
        """
        finder = self.finder
        if finder is None:
            raise RuntimeError("session is not connected")

        config = self.config
        failures: List[ResolutionFailure] = []
        resolved = {}

        def resolve(resource: str, path: str, lookup: Callable, tolerate: Optional[Callable] = None):
            try:
                resolved[resource] = lookup(path)
            except Exception as e:
                try:
                    tolerated = tolerate is not None and tolerate(e)
                except Exception as check_error:
                    logger.debug(f"Unable to check whether {resource} failure is tolerable: {check_error}")
                    failures.append(ResolutionFailure(resource, path, check_error))
                    return
                if tolerated:
                    logger.info(f"Ignoring {resource} lookup failure: {e}")
                    return
                logger.debug(f"Failed to resolve {resource} '{path}': {e}")
                failures.append(ResolutionFailure(resource, path, e))

        resolve("datacenter", config.datacenter_path, finder.datacenter_or_default)
        if "datacenter" in resolved:
            finder.set_datacenter(resolved["datacenter"])

        resolve("cluster", config.cluster_path, finder.compute_resource_or_default)
        resolve("datastore", config.datastore_path, finder.datastore_or_default)
        # A vCenter with several hosts has no default host, and none is needed
        resolve(
            "host",
            config.host_path,
            finder.host_system_or_default,
            tolerate=lambda e: isinstance(e, DefaultMultipleFoundError) and self.is_vc(),
        )
        if config.network_path:
            resolve("network", config.network_path, finder.network_or_default)
        resolve("pool", config.pool_path, finder.resource_pool_or_default)

        if failures:
            self._clear_resources()
            raise ResolutionError(failures)

        for resource in RESOURCES:
            setattr(self, resource, resolved.get(resource))
        logger.info(f"Resolved resources: {', '.join(sorted(resolved))}")
        return self

    def logout(self) -> None:
        """Log out and drop all cached resources."""
        client = self._require_client()
        self.client = None
        self.finder = None
        self._clear_resources()
        client.logout()

    def _require_client(self) -> Client:
        if self.client is None:
            raise RuntimeError("session is not connected")
        return self.client

    def _clear_resources(self) -> None:
        for resource in RESOURCES:
            setattr(self, resource, None)

    def _logout_after_failure(self) -> None:
        try:
            self.logout()
        except Exception as e:
            logger.warning(f"Failed to log out after populate error: {e}")

    def _open(self, endpoint: Endpoint, context: ssl.SSLContext) -> Client:
        try:
            return Client.connect(endpoint, context, timeout=self.config.timeout)
        except Exception as e:
            raise ConnectionFailedError(f"Failed to connect to {endpoint}: {e}") from e

    @staticmethod
    def _check(call: Callable, endpoint: Endpoint):
        try:
            return call()
        except Exception as e:
            raise ConnectionFailedError(f"Failed to connect to {endpoint}: {e}") from e

    @staticmethod
    def _close(client: Client) -> None:
        try:
            client.close()
        except Exception as e:
            logger.warning(f"Failed to close connection to {client.endpoint}: {e}")


def new_session(config: Config) -> Session:
    """Create an unconnected Session for config."""
    return Session(config)
