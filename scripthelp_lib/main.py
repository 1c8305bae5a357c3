"""Composition of the helper surface.

`create_host(config)` wires the host primitives (file manager, secure
store, request factory, dialogs) into a `ScriptHost` whose methods are the
helpers scripts call. Nothing is created at import time, so scripts and
tests can build isolated hosts from their own `HostConfig`:

    from scripthelp_lib import create_host, HostConfig
    host = create_host(HostConfig(data_dir='data', script_path=__file__))
    host.set_storage('token', {'value': 'abc'})
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Union

from PIL import Image

from scripthelp_lib import dialogs
from scripthelp_lib.config import HostConfig
from scripthelp_lib.host.alert import Alert
from scripthelp_lib.host.file_manager import FileManager
from scripthelp_lib.host.interfaces import (
    AlertProtocol,
    FileManagerProtocol,
    KeychainProtocol,
    NotificationProtocol,
    PhotoLibraryProtocol,
    RequestProtocol,
)
from scripthelp_lib.host.keychain import Keychain
from scripthelp_lib.host.notification import Notification
from scripthelp_lib.host.photos import PhotoLibrary
from scripthelp_lib.host.request import Request
from scripthelp_lib.images import GetImageParams, ImageResolver
from scripthelp_lib.net.client import HttpClient
from scripthelp_lib.net.models import RequestParams, RequestResult, UploadFileParams
from scripthelp_lib.storage.kv_store import KeyValueStore, create_stores
from scripthelp_lib.storage.settings_store import SettingsStore
from scripthelp_lib.widget.background import set_transparent_background


@dataclass
class ScriptHost:
    config: HostConfig
    file_manager: FileManagerProtocol
    keychain: KeychainProtocol
    storage: KeyValueStore
    cache: KeyValueStore
    http: HttpClient
    images: ImageResolver
    # Settings live next to the script: in the cloud folder when the script does
    settings_file_manager: FileManagerProtocol
    alert_factory: Callable[[], AlertProtocol] = Alert
    notification_factory: Callable[[], NotificationProtocol] = Notification
    photos: PhotoLibraryProtocol = field(default_factory=PhotoLibrary)

    # Durable storage
    def set_storage(self, key: str, value: Any) -> None:
        self.storage.set(key, value)

    def get_storage(self, key: str) -> Optional[Any]:
        return self.storage.get(key)

    def remove_storage(self, key: str) -> None:
        self.storage.remove(key)

    # Temporary cache
    def set_cache(self, key: str, value: Any) -> None:
        self.cache.set(key, value)

    def get_cache(self, key: str) -> Optional[Any]:
        return self.cache.get(key)

    def remove_cache(self, key: str) -> None:
        self.cache.remove(key)

    def use_setting(self, settings_filename: Optional[str] = None) -> SettingsStore:
        return SettingsStore(self.settings_file_manager, self.config.script_path, settings_filename)

    def request(self, params: Union[RequestParams, Dict[str, Any]]) -> RequestResult:
        return self.http.request(params)

    def upload_file(self, params: Union[UploadFileParams, Dict[str, Any]]) -> RequestResult:
        return self.http.upload_file(params)

    def get_image(self, params: Union[GetImageParams, Dict[str, Any], None] = None) -> Image.Image:
        return self.images.get_image(params)

    def show_action_sheet(self, params) -> int:
        return dialogs.show_action_sheet(params, self.alert_factory)

    def show_modal(self, params) -> dialogs.ShowModalRes:
        return dialogs.show_modal(params, self.alert_factory)

    def show_notification(self, params) -> None:
        dialogs.show_notification(params, self.notification_factory)

    def set_transparent_background(self, tips: Optional[str] = None) -> Optional[Image.Image]:
        return set_transparent_background(tips, alert_factory=self.alert_factory, photos=self.photos)


def create_host(
    config: Optional[HostConfig] = None,
    *,
    keychain: Optional[KeychainProtocol] = None,
    request_factory: Callable[[str], RequestProtocol] = Request,
    **overrides: Any,
) -> ScriptHost:
    """Create a ScriptHost for `config` (defaults when omitted).

    `keychain` and `request_factory` replace the secure store and transport;
    remaining keyword arguments override ScriptHost fields such as
    `alert_factory` or `photos`.
    """
    config = config or HostConfig()
    file_manager = FileManager.local(config)
    settings_fm = FileManager.icloud(config) if config.uses_icloud() else file_manager
    keychain = keychain or Keychain.from_config(config)
    storage, cache = create_stores(file_manager, keychain)
    http = HttpClient(storage, request_factory=request_factory, default_timeout_ms=config.request_timeout_ms)
    return ScriptHost(
        config=config,
        file_manager=file_manager,
        keychain=keychain,
        storage=storage,
        cache=cache,
        http=http,
        images=ImageResolver(http, cache),
        settings_file_manager=settings_fm,
        **overrides,
    )
