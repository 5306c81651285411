"""
Inventory finder.

Resolves human-readable inventory paths ("/dc1/host/cluster1",
"cluster1/Resources/web", "ds-*") to pyVmomi managed objects by walking the
inventory tree, and selects a default object when no path is given.
"""

import fnmatch
import logging
from typing import List, Optional, Sequence, Tuple

from pyVmomi import vim

from .errors import (
    DefaultMultipleFoundError,
    DefaultNotFoundError,
    MultipleFoundError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def _children(entity) -> List[Tuple[str, object]]:
    """Return (name, child) pairs of an inventory node."""
    if isinstance(entity, vim.Folder):
        return [(child.name, child) for child in entity.childEntity]
    if isinstance(entity, vim.Datacenter):
        return [
            ("vm", entity.vmFolder),
            ("host", entity.hostFolder),
            ("datastore", entity.datastoreFolder),
            ("network", entity.networkFolder),
        ]
    if isinstance(entity, vim.ComputeResource):
        children = [(host.name, host) for host in entity.host]
        if entity.resourcePool is not None:
            children.append(("Resources", entity.resourcePool))
        return children
    if isinstance(entity, vim.ResourcePool):
        return [(pool.name, pool) for pool in entity.resourcePool]
    return []


def _split(path: str) -> List[str]:
    return [part for part in path.split("/") if part]


class Finder:
    """Resolve inventory paths relative to an optional current datacenter."""

    def __init__(self, service_instance):
        """
        Initialize finder.

        Args:
            service_instance: Authenticated vim.ServiceInstance
        """
        self.service_instance = service_instance
        self.datacenter = None
        self._root = None

    @property
    def root_folder(self):
        if self._root is None:
            self._root = self.service_instance.RetrieveContent().rootFolder
        return self._root

    def set_datacenter(self, datacenter) -> "Finder":
        """Scope subsequent relative lookups to this datacenter."""
        self.datacenter = datacenter
        return self

    # Tree walking

    def _walk(self, start, parts: Sequence[str]) -> List[object]:
        nodes = [start]
        for part in parts:
            matched = []
            for node in nodes:
                for name, child in _children(node):
                    if fnmatch.fnmatchcase(name, part):
                        matched.append(child)
            nodes = matched
            if not nodes:
                break
        return nodes

    def _list(self, start, path: str, vimtype) -> List[object]:
        if path.startswith("/"):
            start, parts = self.root_folder, _split(path)
        else:
            parts = _split(path)
        return [obj for obj in self._walk(start, parts) if isinstance(obj, vimtype)]

    def _dc_folder(self, attribute: str):
        return getattr(self._current_datacenter(), attribute)

    def _current_datacenter(self):
        if self.datacenter is not None:
            return self.datacenter
        return self.default_datacenter()

    @staticmethod
    def _one(found: List[object], kind: str, path: str):
        if not found:
            raise NotFoundError(kind, path)
        if len(found) > 1:
            raise MultipleFoundError(kind, path)
        return found[0]

    @staticmethod
    def _default(found: List[object], kind: str):
        if not found:
            raise DefaultNotFoundError(kind)
        if len(found) > 1:
            raise DefaultMultipleFoundError(kind)
        return found[0]

    def _resolve(self, kind: str, vimtype, folder: Optional[str], path: str, default: str, fallbacks=()):
        if path.startswith("/") or folder is None:
            start = self.root_folder
        else:
            start = self._dc_folder(folder)

        if not path:
            found = self._list(start, default, vimtype)
            logger.debug(f"Default {kind}: {len(found)} candidate(s)")
            return self._default(found, kind)

        found = self._list(start, path, vimtype)
        if not found and not path.startswith("/"):
            for template in fallbacks:
                found = self._list(start, template.format(path=path), vimtype)
                if found:
                    break
        logger.debug(f"{kind} '{path}': {len(found)} match(es)")
        return self._one(found, kind, path)

    # Public lookups

    def default_datacenter(self):
        found = self._list(self.root_folder, "*", vim.Datacenter)
        return self._default(found, "datacenter")

    def datacenter_or_default(self, path: str = ""):
        return self._resolve("datacenter", vim.Datacenter, None, path, "*")

    def compute_resource_or_default(self, path: str = ""):
        return self._resolve("compute resource", vim.ComputeResource, "hostFolder", path, "*")

    def datastore_or_default(self, path: str = ""):
        return self._resolve("datastore", vim.Datastore, "datastoreFolder", path, "*")

    def host_system_or_default(self, path: str = ""):
        fallbacks = ("*/{path}",) if "/" not in path else ()
        return self._resolve("host", vim.HostSystem, "hostFolder", path, "*/*", fallbacks)

    def network_or_default(self, path: str = ""):
        return self._resolve("network", vim.Network, "networkFolder", path, "*")

    def resource_pool_or_default(self, path: str = ""):
        return self._resolve(
            "resource pool", vim.ResourcePool, "hostFolder", path, "*/Resources", ("*/Resources/{path}",)
        )
