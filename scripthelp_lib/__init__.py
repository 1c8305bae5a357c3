"""Helper library for single-device automation scripts.

Wraps storage, settings, HTTP, image, dialog and notification primitives
behind simple helpers. Start from `create_host`.
"""

from .config import HostConfig, load_host_config
from .main import ScriptHost, create_host
from .util import hash_string, base64_encode, base64_decode

__all__ = [
    "HostConfig",
    "load_host_config",
    "ScriptHost",
    "create_host",
    "hash_string",
    "base64_encode",
    "base64_decode",
]
