import logging

import pytest
import yaml

from scripthelp_lib.config import HostConfig, ensure_host_config, load_host_config
from scripthelp_lib.logging_config import configure_logging


def test_defaults_derive_from_data_dir(tmp_path):
    config = HostConfig(data_dir=str(tmp_path))
    assert config.library_dir == str(tmp_path / 'library')
    assert config.temporary_dir == str(tmp_path / 'tmp')
    assert config.documents_dir == str(tmp_path / 'documents')
    assert config.keychain_dir == str(tmp_path / 'keychain')
    assert config.request_timeout_ms == 60000


def test_validation():
    with pytest.raises(ValueError):
        HostConfig(request_timeout_ms=0)
    with pytest.raises(ValueError):
        HostConfig(log_level='LOUD')


def test_uses_icloud(tmp_path):
    cloud = tmp_path / 'cloud'
    assert HostConfig(icloud_dir=str(cloud), script_path=str(cloud / 'w.py')).uses_icloud() is True
    assert HostConfig(icloud_dir=str(cloud), script_path=str(tmp_path / 'w.py')).uses_icloud() is False
    assert HostConfig(script_path=str(cloud / 'w.py')).uses_icloud() is False


def test_load_from_yaml_with_env_secret(tmp_path, monkeypatch):
    path = tmp_path / 'host_config.yml'
    path.write_text(yaml.safe_dump({'data_dir': str(tmp_path), 'log_level': 'DEBUG', 'bogus': 1}))
    monkeypatch.setenv('SCRIPTHELP_KEYCHAIN_SECRET', 's3cret')
    config = load_host_config(path)
    assert config.log_level == 'DEBUG'
    assert config.keychain_secret == 's3cret'
    assert config.library_dir == str(tmp_path / 'library')


def test_load_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv('SCRIPTHELP_KEYCHAIN_SECRET', raising=False)
    config = load_host_config(tmp_path / 'absent.yml')
    assert config == HostConfig()


def test_load_rejects_non_mapping(tmp_path):
    path = tmp_path / 'host_config.yml'
    path.write_text('- a\n- b\n')
    with pytest.raises(ValueError):
        load_host_config(path)


def test_ensure_writes_default_file(tmp_path):
    path = tmp_path / 'config' / 'host_config.yml'
    config = ensure_host_config(path)
    assert path.exists()
    written = yaml.safe_load(path.read_text())
    assert 'keychain_secret' not in written
    assert written['log_level'] == 'WARNING'
    assert config.data_dir == 'data'


def test_configure_logging_reads_level(tmp_path):
    path = tmp_path / 'host_config.yml'
    path.write_text(yaml.safe_dump({'log_level': 'debug'}))
    configure_logging(path)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger('urllib3').level == logging.WARNING


def test_configure_logging_falls_back_on_bad_yaml(tmp_path):
    path = tmp_path / 'host_config.yml'
    path.write_text('log_level: [unclosed')
    configure_logging(path)
    assert logging.getLogger().level == logging.WARNING
