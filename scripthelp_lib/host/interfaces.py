"""Protocols for the host primitives the helpers consume.

The concrete implementations live beside this module; tests substitute
lightweight fakes that satisfy the same surface.
"""
from __future__ import annotations
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from PIL import Image


@runtime_checkable
class FileManagerProtocol(Protocol):
    def library_directory(self) -> str: ...

    def temporary_directory(self) -> str: ...

    def documents_directory(self) -> str: ...

    def is_icloud(self) -> bool: ...

    def join_path(self, *parts: str) -> str: ...

    def file_exists(self, path: str) -> bool: ...

    def create_directory(self, path: str, intermediate: bool = False) -> None: ...

    def read(self, path: str) -> bytes: ...

    def write(self, path: str, data: bytes) -> None: ...

    def read_string(self, path: str) -> str: ...

    def write_string(self, path: str, text: str) -> None: ...

    def read_image(self, path: str) -> Optional[Image.Image]: ...

    def write_image(self, path: str, image: Image.Image) -> None: ...

    def remove(self, path: str) -> None: ...

    def download_file_from_icloud(self, path: str) -> None: ...


@runtime_checkable
class KeychainProtocol(Protocol):
    def contains(self, key: str) -> bool: ...

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


@runtime_checkable
class RequestProtocol(Protocol):
    url: str
    method: str
    headers: Dict[str, str]
    body: Any
    timeout_interval: float
    allow_insecure_request: bool
    response: Dict[str, Any]

    def add_file_to_multipart(self, file_path: str, name: str, filename: Optional[str] = None) -> None: ...

    def add_image_to_multipart(self, image: Image.Image, name: str, filename: Optional[str] = None) -> None: ...

    def add_parameter_to_multipart(self, name: str, value: str) -> None: ...

    def load(self) -> bytes: ...

    def load_string(self) -> str: ...

    def load_json(self) -> Any: ...

    def load_image(self) -> Image.Image: ...


@runtime_checkable
class AlertProtocol(Protocol):
    title: Optional[str]
    message: Optional[str]

    def add_action(self, title: str) -> None: ...

    def add_destructive_action(self, title: str) -> None: ...

    def add_cancel_action(self, title: str) -> None: ...

    def add_text_field(self, placeholder: str = '', text: str = '') -> None: ...

    def add_secure_text_field(self, placeholder: str = '', text: str = '') -> None: ...

    def present_alert(self) -> int: ...

    def present_sheet(self) -> int: ...

    def text_field_value(self, index: int) -> str: ...


@runtime_checkable
class NotificationProtocol(Protocol):
    title: str
    subtitle: str
    body: str
    sound: Optional[str]
    open_url: Optional[str]

    def schedule(self) -> None: ...


@runtime_checkable
class PhotoLibraryProtocol(Protocol):
    def from_library(self) -> Image.Image: ...
