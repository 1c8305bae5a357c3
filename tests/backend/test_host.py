from PIL import Image

from scripthelp_lib import HostConfig, create_host
from scripthelp_lib.host.file_manager import FileManager
from scripthelp_lib.storage.kv_store import StorageScope

from tests.helpers import FakeTransport, ScriptedAlert, make_host


def test_create_host_with_real_secure_store(tmp_path):
    host = create_host(HostConfig(data_dir=str(tmp_path / 'data'), script_path=str(tmp_path / 'clock.py')))
    assert host.storage.scope is StorageScope.DURABLE
    assert host.cache.scope is StorageScope.TEMPORARY

    host.set_storage('prefs', {'city': 'Oslo'})
    host.set_cache('last', [1, 2])
    assert host.get_storage('prefs') == {'city': 'Oslo'}
    assert host.get_cache('last') == [1, 2]
    host.remove_storage('prefs')
    host.remove_cache('last')
    assert host.get_storage('prefs') is None
    assert host.get_cache('last') is None

    # a new host for the same script sees durable values
    host.set_storage('kept', 'yes')
    again = create_host(HostConfig(data_dir=str(tmp_path / 'data'), script_path=str(tmp_path / 'clock.py')))
    assert again.get_storage('kept') == 'yes'


def test_image_storage_through_host(tmp_path):
    host = make_host(tmp_path)
    host.set_storage('bg', Image.new('RGB', (30, 40)))
    assert host.get_storage('bg').size == (30, 40)


def test_use_setting_defaults_to_script_name(tmp_path):
    host = make_host(tmp_path)
    settings = host.use_setting()
    assert settings.filename == 'widget.json'
    settings.set_settings('a', 1)
    assert host.use_setting().get_settings('a') == 1
    assert host.use_setting('other').get_settings('a') is None


def test_settings_follow_script_into_cloud_folder(tmp_path):
    cloud = tmp_path / 'cloud'
    config = HostConfig(data_dir=str(tmp_path / 'data'), icloud_dir=str(cloud), script_path=str(cloud / 'w.py'))
    host = create_host(config)
    assert host.settings_file_manager.is_icloud()
    host.use_setting().set_settings('a', 1)
    assert (cloud / 'settings-json' / 'w.json').exists()
    assert isinstance(host.file_manager, FileManager) and not host.file_manager.is_icloud()


def test_dialog_helpers_use_host_factories(tmp_path):
    alert = ScriptedAlert(tap=-1)
    delivered = []

    class RecordingNotification:
        def __init__(self):
            self.title = self.subtitle = self.body = ''
            self.sound = self.open_url = None

        def schedule(self):
            delivered.append(self)

    host = make_host(tmp_path, alert_factory=lambda: alert, notification_factory=RecordingNotification)
    assert host.show_action_sheet({'item_list': ['a']}) == -1
    assert host.show_modal({'content': 'x'}).cancel is True
    host.show_notification({'title': 'done'})
    assert delivered[0].title == 'done'


def test_request_and_image_through_host(tmp_path):
    transport = FakeTransport()
    host = make_host(tmp_path, transport)
    transport.respond('https://x.test/a', {'ok': 1})
    assert host.request({'url': 'https://x.test/a'}).data == {'ok': 1}
    transport.respond('https://x.test/i.png', Image.new('RGB', (2, 2)))
    assert host.get_image({'url': 'https://x.test/i.png'}).size == (2, 2)
