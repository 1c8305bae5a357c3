"""File storage primitive.

A FileManager is rooted at three directories: the library directory
(durable storage), the temporary directory (cache lifetime) and the
documents directory (user-visible files such as settings). A manager
created with `FileManager.icloud` points its documents directory at a
cloud-synced folder and materialises placeholder files before reads.
"""
from __future__ import annotations
import logging
import os
import shutil
import subprocess
import time
from pathlib import Path
from typing import Optional

from PIL import Image

from scripthelp_lib.config import HostConfig
from scripthelp_lib.host.image import image_from_file, image_to_bytes

logger = logging.getLogger(__name__)

SYNC_TOOL = 'brctl'
SYNC_TIMEOUT_S = 30.0
SYNC_POLL_S = 0.25


class FileManager:
    def __init__(
        self,
        library_dir: str | Path,
        temporary_dir: str | Path,
        documents_dir: str | Path,
        *,
        icloud: bool = False,
        sync_timeout_s: float = SYNC_TIMEOUT_S,
    ) -> None:
        self._library = Path(library_dir)
        self._temporary = Path(temporary_dir)
        self._documents = Path(documents_dir)
        self._icloud = icloud
        self.sync_timeout_s = sync_timeout_s
        for d in (self._library, self._temporary, self._documents):
            d.mkdir(parents=True, exist_ok=True)

    @classmethod
    def local(cls, config: HostConfig) -> "FileManager":
        return cls(config.library_dir, config.temporary_dir, config.documents_dir)

    @classmethod
    def icloud(cls, config: HostConfig) -> "FileManager":
        if not config.icloud_dir:
            raise ValueError("icloud_dir is not configured")
        return cls(config.library_dir, config.temporary_dir, config.icloud_dir, icloud=True)

    def library_directory(self) -> str:
        return str(self._library)

    def temporary_directory(self) -> str:
        return str(self._temporary)

    def documents_directory(self) -> str:
        return str(self._documents)

    def is_icloud(self) -> bool:
        return self._icloud

    def join_path(self, *parts: str) -> str:
        # Later segments are relative even when they start with a separator
        head, *rest = parts
        return str(Path(head).joinpath(*(p.lstrip('/\\') for p in rest)))

    def file_exists(self, path: str) -> bool:
        """True for local files and, on cloud-backed managers, for evicted ones."""
        p = Path(path)
        if p.exists():
            return True
        return self._icloud and self._placeholder_for(p).exists()

    def create_directory(self, path: str, intermediate: bool = False) -> None:
        Path(path).mkdir(parents=intermediate, exist_ok=True)

    def read(self, path: str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    def write(self, path: str, data: bytes) -> None:
        target = Path(path)
        tmp = target.with_name(target.name + '.tmp')
        with open(tmp, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        tmp.replace(target)

    def read_string(self, path: str) -> str:
        return self.read(path).decode('utf-8')

    def write_string(self, path: str, text: str) -> None:
        self.write(path, text.encode('utf-8'))

    def read_image(self, path: str) -> Optional[Image.Image]:
        return image_from_file(path)

    def write_image(self, path: str, image: Image.Image) -> None:
        self.write(path, image_to_bytes(image))

    def remove(self, path: str) -> None:
        p = Path(path)
        if p.is_dir():
            shutil.rmtree(p)
        else:
            p.unlink()

    def _placeholder_for(self, path: Path) -> Path:
        # Evicted cloud files are replaced by a hidden `.name.icloud` stub
        return path.with_name(f".{path.name}.icloud")

    def download_file_from_icloud(self, path: str) -> None:
        """Make sure a local copy of `path` exists.

        Local managers return immediately. Cloud-backed managers ask the
        platform sync tool to download an evicted file and wait for it;
        `TimeoutError` is raised if it does not appear in time.
        """
        if not self._icloud:
            return
        target = Path(path)
        stub = self._placeholder_for(target)
        if target.exists() or not stub.exists():
            return

        tool = shutil.which(SYNC_TOOL)
        if tool is None:
            raise FileNotFoundError(f"{path} is not downloaded and {SYNC_TOOL} is unavailable")
        logger.debug("Requesting download of %s", path)
        subprocess.run([tool, 'download', str(target)], check=True, capture_output=True)

        deadline = time.monotonic() + self.sync_timeout_s
        while not target.exists():
            if time.monotonic() > deadline:
                raise TimeoutError(f"Timed out waiting for {path} to download")
            time.sleep(SYNC_POLL_S)
