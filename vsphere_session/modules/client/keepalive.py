"""
Keep-alive stub decorator.

Wraps a pyVmomi SOAP stub and, once a session has been logged in, issues a
no-op call whenever the session has been idle for the configured interval
so that the server does not expire it.
"""

import logging
import threading
import time
from typing import Callable, Optional

from pyVmomi import vim

logger = logging.getLogger(__name__)

LOGIN_METHODS = frozenset(
    {"Login", "LoginByToken", "LoginExtensionByCertificate", "LoginExtensionBySubjectName"}
)
LOGOUT_METHOD = "Logout"


class KeepAlive:
    """Stub decorator that keeps an idle vSphere session alive."""

    def __init__(
        self,
        stub,
        interval: float,
        handler: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize keep-alive wrapper.

        Args:
            stub: The SOAP stub being wrapped
            interval: Idle time in seconds after which the handler runs
            handler: No-op call to issue; defaults to ServiceInstance.CurrentTime()
        """
        if interval <= 0:
            raise ValueError("keep-alive interval must be positive")

        self.stub = stub
        self.interval = interval
        self.handler = handler or self._current_time

        self._last_used = time.monotonic()
        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop = threading.Event()

    def InvokeMethod(self, mo, info, args, outerStub=None):
        if info.name == LOGOUT_METHOD:
            self.stop()

        # Pass ourselves as the outer stub so returned managed objects
        # keep routing through the wrapper.
        result = self.stub.InvokeMethod(mo, info, args, outerStub or self)
        self._touch()

        if info.name in LOGIN_METHODS:
            self.start()
        return result

    def InvokeAccessor(self, mo, info):
        result = self.stub.InvokeAccessor(mo, info)
        self._touch()
        return result

    def __getattr__(self, name):
        if name == "stub":
            raise AttributeError(name)
        return getattr(self.stub, name)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start the background keep-alive thread."""
        if self.running:
            return

        self._stop.clear()
        self._thread = threading.Thread(target=self._run, daemon=True, name="vsphere-keepalive")
        self._thread.start()
        logger.debug(f"Keep-alive started (interval {self.interval}s)")

    def stop(self) -> None:
        """Stop the background keep-alive thread."""
        self._stop.set()
        thread = self._thread
        if thread and thread.is_alive() and thread is not threading.current_thread():
            thread.join()
        self._thread = None

    def _touch(self) -> None:
        with self._lock:
            self._last_used = time.monotonic()

    def _idle(self) -> float:
        with self._lock:
            return time.monotonic() - self._last_used

    def _run(self) -> None:
        timeout = self.interval
        while not self._stop.wait(timeout):
            idle = self._idle()
            if idle < self.interval:
                timeout = self.interval - idle
                continue

            try:
                self.handler()
            except Exception as e:
                logger.error(f"Keep-alive request failed, stopping keep-alive: {e}")
                return

            self._touch()
            timeout = self.interval

    def _current_time(self) -> None:
        vim.ServiceInstance("ServiceInstance", self.stub).CurrentTime()
