"""Per-script settings document.

Each script gets one JSON object persisted at
`<documents>/settings-json/<name>.json`. Every `set_settings` is a
read-modify-write of the whole document; concurrent writers lose updates.
File and JSON errors propagate to the caller.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from scripthelp_lib.host.interfaces import FileManagerProtocol
from scripthelp_lib.util import hash_string

logger = logging.getLogger(__name__)

SETTINGS_FOLDER = 'settings-json'


def settings_name_for(script_path: str, settings_filename: Optional[str] = None) -> str:
    """Explicit name, else the script's file name without extension, else a path hash."""
    if settings_filename:
        return settings_filename
    return Path(script_path).stem or hash_string(f"settings:{script_path}")


class SettingsStore:
    def __init__(self, file_manager: FileManagerProtocol, script_path: str, settings_filename: Optional[str] = None):
        self.file_manager = file_manager
        self.is_icloud = file_manager.is_icloud()
        self.folder_path = file_manager.join_path(file_manager.documents_directory(), SETTINGS_FOLDER)
        self.filename = f"{settings_name_for(script_path, settings_filename)}.json"
        self.path = file_manager.join_path(self.folder_path, self.filename)

    def _ensure_file(self) -> bool:
        """Create the folder and an empty document if needed; return whether it already existed.

        Cloud-backed managers report an evicted document as existing, so it is
        downloaded by `_read` rather than replaced.
        """
        fm = self.file_manager
        if not fm.file_exists(self.folder_path):
            fm.create_directory(self.folder_path, True)
        if not fm.file_exists(self.path):
            fm.write_string(self.path, '{}')
            logger.debug("Created settings document %s", self.path)
            return False
        return True

    def _read(self) -> Dict[str, Any]:
        if self.is_icloud:
            self.file_manager.download_file_from_icloud(self.path)
        return json.loads(self.file_manager.read_string(self.path)) or {}

    def get_settings(self, key: str) -> Optional[Any]:
        if not self._ensure_file():
            return None
        return self._read().get(key)

    def set_settings(self, key: str, value: Any) -> Optional[Dict[str, Any]]:
        """Store `value` under `key`.

        Returns the full updated document, or None when the document was
        just created (it then holds only `{key: value}`).
        """
        if not self._ensure_file():
            self.file_manager.write_string(self.path, json.dumps({key: value}, ensure_ascii=False))
            return None
        settings = self._read()
        settings[key] = value
        self.file_manager.write_string(self.path, json.dumps(settings, ensure_ascii=False))
        return settings
