"""
Client Module - Black Box Interface

Purpose: Talk to a vSphere SDK endpoint
Interface: parse_url(), Client.connect(), login(), logout(), install_keepalive()
Hidden: pyVmomi stubs, TLS context handling, keep-alive thread

Replaceable with any other SDK binding exposing the same calls.
"""

from .client import Client, build_ssl_context, load_key_pair
from .keepalive import KeepAlive
from .url import Endpoint, parse_url

__all__ = ["Client", "Endpoint", "KeepAlive", "build_ssl_context", "load_key_pair", "parse_url"]
