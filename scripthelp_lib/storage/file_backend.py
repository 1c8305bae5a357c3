"""File-backed storage backend.

Values are run through a serializer and written to
`<data_dir>/<namespace>/<key><extension>`. Writes are atomic: the payload
goes to a temporary file which is then renamed over the target.
"""
from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Iterable, Optional

from .base import StorageBackend
from .serializer import JSONSerializer, Serializer


class FileStorageBackend(StorageBackend):
    def __init__(
        self,
        data_dir: str | Path = "./data",
        serializer: Optional[Serializer] = None,
        extension: str = ".json",
    ) -> None:
        self.data_dir = Path(data_dir)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.serializer = serializer or JSONSerializer()
        self.extension = extension

    def _ns_dir(self, namespace: str) -> Path:
        ns = self.data_dir / namespace
        ns.mkdir(parents=True, exist_ok=True)
        return ns

    def _path_for(self, namespace: str, key: str) -> Path:
        safe_key = key.replace("/", "_")
        return self._ns_dir(namespace) / f"{safe_key}{self.extension}"

    def save(self, namespace: str, key: str, value: Any) -> None:
        path = self._path_for(namespace, key)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with open(tmp, "wb") as f:
            f.write(self.serializer.dump(value))
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(path)

    def load(self, namespace: str, key: str) -> Any:
        path = self._path_for(namespace, key)
        if not path.exists():
            raise KeyError(key)
        with open(path, "rb") as f:
            return self.serializer.load(f.read())

    def delete(self, namespace: str, key: str) -> None:
        path = self._path_for(namespace, key)
        if not path.exists():
            raise KeyError(key)
        path.unlink()

    def list_keys(self, namespace: str) -> Iterable[str]:
        ns = self._ns_dir(namespace)
        for p in ns.iterdir():
            if p.is_file() and p.name.endswith(self.extension):
                yield p.name[: -len(self.extension)] if self.extension else p.name

    def exists(self, namespace: str, key: str) -> bool:
        return self._path_for(namespace, key).exists()
