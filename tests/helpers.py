from typing import Any, Dict, List, Optional

from scripthelp_lib.config import HostConfig
from scripthelp_lib.host.keychain import Keychain
from scripthelp_lib.main import ScriptHost, create_host
from scripthelp_lib.storage.memory_backend import MemoryStorage


class FakeRequest:
    """Request double that answers from a FakeTransport instead of the network."""

    def __init__(self, transport: "FakeTransport", url: str):
        self._transport = transport
        self.url = url
        self.method = 'GET'
        self.headers: Dict[str, str] = {}
        self.body: Any = None
        self.timeout_interval = 60.0
        self.allow_insecure_request = False
        self.response: Dict[str, Any] = {}
        self.multipart: List[tuple] = []

    def add_file_to_multipart(self, file_path, name, filename=None):
        with open(file_path, 'rb') as f:
            self.multipart.append(('file', name, filename, f.read()))

    def add_image_to_multipart(self, image, name, filename=None):
        self.multipart.append(('image', name, filename, image))

    def add_parameter_to_multipart(self, name, value):
        self.multipart.append(('param', name, value))

    def _load(self, kind: str) -> Any:
        self._transport.calls.append((self, kind))
        route = self._transport.routes.get(self.url)
        if route is None:
            raise ConnectionError(f"no route to {self.url}")
        if isinstance(route, Exception):
            raise route
        body, status = route
        self.response = {
            'url': self.url,
            'status_code': status,
            'mime_type': 'application/json',
            'text_encoding_name': 'utf-8',
            'headers': {'X-Fake': '1'},
            'cookies': [{'name': 'sid', 'value': 'abc', 'domain': 'example.com'}],
        }
        return body

    def load(self):
        return self._load('data')

    def load_string(self):
        return self._load('text')

    def load_json(self):
        return self._load('json')

    def load_image(self):
        return self._load('image')


class FakeTransport:
    """Request factory recording every load; routes map url -> (body, status) or an exception."""

    def __init__(self):
        self.routes: Dict[str, Any] = {}
        self.calls: List[tuple] = []

    def respond(self, url: str, body: Any, status: int = 200) -> None:
        self.routes[url] = (body, status)

    def fail(self, url: str, error: Optional[Exception] = None) -> None:
        self.routes[url] = error or TimeoutError('timed out')

    def __call__(self, url: str) -> FakeRequest:
        return FakeRequest(self, url)


class ScriptedAlert:
    """Alert double that taps a pre-chosen index and fills text fields from a list."""

    def __init__(self, tap: int = 0, texts: Optional[List[str]] = None):
        self.title = None
        self.message = None
        self.actions: List[tuple] = []
        self.cancel = None
        self.fields: List[tuple] = []
        self.tap = tap
        self.texts = texts or []
        self.presented = None

    def add_action(self, title):
        self.actions.append((title, 'normal'))

    def add_destructive_action(self, title):
        self.actions.append((title, 'destructive'))

    def add_cancel_action(self, title):
        self.cancel = title

    def add_text_field(self, placeholder='', text=''):
        self.fields.append((placeholder, text, False))

    def add_secure_text_field(self, placeholder='', text=''):
        self.fields.append((placeholder, text, True))

    def present_alert(self):
        self.presented = 'alert'
        return self.tap

    def present_sheet(self):
        self.presented = 'sheet'
        return self.tap

    def text_field_value(self, index):
        return self.texts[index] if index < len(self.texts) else self.fields[index][1]


def make_host(tmp_path, transport: Optional[FakeTransport] = None, **overrides) -> ScriptHost:
    """Host rooted in `tmp_path` with an in-memory secure store and a fake transport."""
    config = HostConfig(data_dir=str(tmp_path / 'data'), script_path=str(tmp_path / 'widget.py'))
    return create_host(
        config,
        keychain=Keychain(MemoryStorage(), 'widget'),
        request_factory=transport or FakeTransport(),
        **overrides,
    )
