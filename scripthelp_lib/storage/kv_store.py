"""Key-value store over the host file system and secure string store.

Every logical key is hashed with `hash_string`. Images and binary values are
written as files named after the hash inside the store's scope directory;
JSON values (and, additionally, binary values) go into the secure string
store under the same hash. Reads check the file first, then the secure store.

There is no expiry, eviction or locking: the last write wins.
"""
from __future__ import annotations
import base64
import enum
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from PIL import Image

from scripthelp_lib.host.image import image_from_bytes, is_image
from scripthelp_lib.host.interfaces import FileManagerProtocol, KeychainProtocol
from scripthelp_lib.util import hash_string

logger = logging.getLogger(__name__)


class StorageScope(enum.Enum):
    DURABLE = 'durable'
    TEMPORARY = 'temporary'


@dataclass(frozen=True)
class JsonValue:
    value: Any


@dataclass(frozen=True)
class BinaryValue:
    data: bytes


@dataclass(frozen=True)
class ImageValue:
    image: Image.Image


StoredValue = Union[JsonValue, BinaryValue, ImageValue]


def classify_value(value: Any) -> StoredValue:
    """Decide how a caller-supplied value is persisted."""
    if isinstance(value, (JsonValue, BinaryValue, ImageValue)):
        return value
    if is_image(value):
        return ImageValue(value)
    if isinstance(value, (bytes, bytearray)):
        return BinaryValue(bytes(value))
    return JsonValue(value)


class KeyValueStore:
    def __init__(self, file_manager: FileManagerProtocol, keychain: KeychainProtocol, scope: StorageScope):
        self.file_manager = file_manager
        self.keychain = keychain
        self.scope = scope

    def _scope_dir(self) -> str:
        if self.scope is StorageScope.TEMPORARY:
            return self.file_manager.temporary_directory()
        return self.file_manager.library_directory()

    def _lookup_path(self, hash_key: str) -> str:
        # Lookups always resolve against the durable root, whatever the scope
        return self.file_manager.join_path(self.file_manager.library_directory(), hash_key)

    def set(self, key: str, value: Any) -> None:
        hash_key = hash_string(key)
        stored = classify_value(value)
        file_path = self.file_manager.join_path(self._scope_dir(), hash_key)

        if isinstance(stored, ImageValue):
            self.file_manager.write_image(file_path, stored.image)
            return
        if isinstance(stored, BinaryValue):
            self.file_manager.write(file_path, stored.data)
            text = json.dumps(base64.b64encode(stored.data).decode('ascii'))
        else:
            text = json.dumps(stored.value, ensure_ascii=False)
        self.keychain.set(hash_key, text)
        logger.debug("Stored %s in %s scope", hash_key, self.scope.value)

    def get(self, key: str) -> Optional[Any]:
        hash_key = hash_string(key)
        file_path = self._lookup_path(hash_key)
        if self.file_manager.file_exists(file_path):
            data = self.file_manager.read(file_path)
            image = image_from_bytes(data)
            return image if image is not None else data

        if self.keychain.contains(hash_key):
            return json.loads(self.keychain.get(hash_key))
        return None

    def remove(self, key: str) -> None:
        hash_key = hash_string(key)
        file_path = self._lookup_path(hash_key)
        if self.file_manager.file_exists(file_path):
            self.file_manager.remove(file_path)
        if self.keychain.contains(hash_key):
            self.keychain.remove(hash_key)


def create_stores(file_manager: FileManagerProtocol, keychain: KeychainProtocol) -> Tuple[KeyValueStore, KeyValueStore]:
    """Return the (durable storage, temporary cache) pair sharing one secure store."""
    return (
        KeyValueStore(file_manager, keychain, StorageScope.DURABLE),
        KeyValueStore(file_manager, keychain, StorageScope.TEMPORARY),
    )
