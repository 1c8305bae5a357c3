"""Secure string store scoped to the running script.

Entries live in a namespace/key storage backend under the script's scope
and are encrypted at rest with Fernet. The key is taken from the configured
secret (a passphrase) or generated once into an owner-only key file.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Optional

from scripthelp_lib.config import HostConfig
from scripthelp_lib.storage.file_backend import FileStorageBackend
from scripthelp_lib.storage.interfaces import StorageProtocol
from scripthelp_lib.storage.serializer import EncryptedSerializer
from scripthelp_lib.util import hash_string

logger = logging.getLogger(__name__)

KEY_FILE = '.keychain.key'


def script_scope(script_path: str) -> str:
    """Namespace for a script's entries: its file stem, or a hash of its path."""
    stem = Path(script_path).stem
    return stem or hash_string(f"keychain:{script_path}")


def load_or_create_key(key_path: str | Path) -> bytes:
    path = Path(key_path)
    if path.exists():
        return path.read_bytes().strip()
    path.parent.mkdir(parents=True, exist_ok=True)
    key = EncryptedSerializer.generate_key()
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
    with os.fdopen(fd, 'wb') as f:
        f.write(key)
    logger.info("Generated keychain key at %s", path)
    return key


class Keychain:
    def __init__(self, backend: StorageProtocol, scope: str):
        self.backend = backend
        self.scope = scope

    @classmethod
    def from_config(cls, config: HostConfig) -> "Keychain":
        if config.keychain_secret:
            serializer = EncryptedSerializer(password=config.keychain_secret)
        else:
            serializer = EncryptedSerializer(key=load_or_create_key(Path(config.keychain_dir) / KEY_FILE))
        backend = FileStorageBackend(config.keychain_dir, serializer=serializer, extension='.secret')
        return cls(backend, script_scope(config.script_path))

    def contains(self, key: str) -> bool:
        return self.backend.exists(self.scope, key)

    def get(self, key: str) -> Optional[str]:
        try:
            return self.backend.load(self.scope, key)
        except KeyError:
            return None

    def set(self, key: str, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Keychain values must be strings, got {type(value).__name__}")
        self.backend.save(self.scope, key, value)

    def remove(self, key: str) -> None:
        self.backend.delete(self.scope, key)
