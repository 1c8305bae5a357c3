"""Host configuration for scripthelp.

`HostConfig` describes where the host primitives keep their data: the
durable (library) and temporary directories of the key-value store, the
documents directory holding settings files, an optional cloud-synced
documents root, and the secure store. Values are read from a YAML file.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('data/config/host_config.yml')
SECRET_ENV_VAR = 'SCRIPTHELP_KEYCHAIN_SECRET'
DEFAULT_TIMEOUT_MS = 60 * 1000


@dataclass
class HostConfig:
    data_dir: str = "data"
    library_dir: Optional[str] = None
    temporary_dir: Optional[str] = None
    documents_dir: Optional[str] = None
    icloud_dir: Optional[str] = None
    keychain_dir: Optional[str] = None
    keychain_secret: Optional[str] = None
    # Path of the script using the helpers; scopes the secure store and names settings files
    script_path: str = "script.py"
    log_level: str = "WARNING"
    request_timeout_ms: float = DEFAULT_TIMEOUT_MS

    def __post_init__(self):
        base = Path(self.data_dir)
        self.library_dir = self.library_dir or str(base / 'library')
        self.temporary_dir = self.temporary_dir or str(base / 'tmp')
        self.documents_dir = self.documents_dir or str(base / 'documents')
        self.keychain_dir = self.keychain_dir or str(base / 'keychain')

        if self.request_timeout_ms <= 0:
            raise ValueError(f"request_timeout_ms must be positive, got {self.request_timeout_ms}")
        if not isinstance(getattr(logging, str(self.log_level).upper(), None), int):
            raise ValueError(f"Unknown log_level: {self.log_level}")

    def uses_icloud(self) -> bool:
        """True when the script lives inside the cloud-synced documents root."""
        if not self.icloud_dir:
            return False
        try:
            Path(self.script_path).resolve().relative_to(Path(self.icloud_dir).resolve())
        except ValueError:
            return False
        return True


def load_host_config(config_path: Optional[Path] = None) -> HostConfig:
    """Load a HostConfig from YAML, falling back to defaults for missing keys.

    Unknown keys are ignored with a warning. The keychain secret may be
    supplied through the environment instead of the file.
    """
    cfg_path = Path(config_path or DEFAULT_CONFIG_PATH)
    raw: dict = {}
    if cfg_path.exists():
        with cfg_path.open('r', encoding='utf-8') as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{cfg_path} must contain a mapping")

    known = {f.name for f in fields(HostConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", cfg_path, ", ".join(unknown))
    values = {k: v for k, v in raw.items() if k in known}

    secret = os.environ.get(SECRET_ENV_VAR)
    if secret:
        values['keychain_secret'] = secret

    return HostConfig(**values)


def ensure_host_config(config_path: Optional[Path] = None) -> HostConfig:
    """Write a default config file when missing, then load it."""
    cfg_path = Path(config_path or DEFAULT_CONFIG_PATH)
    if not cfg_path.exists():
        logger.info("host config missing; creating default %s", cfg_path)
        cfg_path.parent.mkdir(parents=True, exist_ok=True)
        defaults = asdict(HostConfig())
        defaults.pop('keychain_secret')
        with cfg_path.open('w', encoding='utf-8') as f:
            yaml.safe_dump(defaults, f, sort_keys=False)
    return load_host_config(cfg_path)
