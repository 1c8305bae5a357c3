import pytest
from PIL import Image

from scripthelp_lib.images import GetImageParams, ImageResolver, image_cache_key
from scripthelp_lib.net.client import cache_key_for
from scripthelp_lib.util import hash_string

from tests.helpers import FakeTransport, make_host

URL = 'https://example.com/logo.png'


def is_placeholder(img):
    return img.size == (100, 100) and img.getpixel((50, 50)) == (255, 0, 0)


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def host(tmp_path, transport):
    return make_host(tmp_path, transport)


def test_no_source_returns_placeholder(host, transport):
    assert is_placeholder(host.get_image())
    assert is_placeholder(host.get_image({}))
    assert transport.calls == []


def test_local_file(host, tmp_path):
    path = tmp_path / 'local.png'
    Image.new('RGB', (12, 7), 'green').save(path)
    img = host.get_image({'filepath': str(path)})
    assert img.size == (12, 7)


def test_unreadable_local_file_returns_placeholder(host, tmp_path):
    path = tmp_path / 'broken.png'
    path.write_bytes(b'not an image')
    assert is_placeholder(host.get_image({'filepath': str(path)}))
    assert is_placeholder(host.get_image({'filepath': str(tmp_path / 'missing.png')}))


def test_filepath_takes_priority_over_url(host, transport, tmp_path):
    path = tmp_path / 'local.png'
    Image.new('RGB', (3, 3)).save(path)
    transport.respond(URL, Image.new('RGB', (9, 9)))
    assert host.get_image({'filepath': str(path), 'url': URL}).size == (3, 3)
    assert transport.calls == []


def test_network_fetch_caches_in_temporary_scope(host, transport):
    transport.respond(URL, Image.new('RGB', (20, 10)))
    img = host.get_image({'url': URL})
    assert img.size == (20, 10)
    fm = host.file_manager
    assert fm.file_exists(fm.join_path(fm.temporary_directory(), hash_string(image_cache_key(URL))))
    req, kind = transport.calls[0]
    assert kind == 'image'


def test_cached_image_is_served_without_network(host, transport, monkeypatch):
    cached = Image.new('RGB', (6, 6))
    monkeypatch.setattr(host.cache, 'get', lambda key: cached if key == image_cache_key(URL) else None)
    assert host.get_image({'url': URL}) is cached
    assert transport.calls == []


def test_non_image_cache_entry_is_removed_then_fetched(host, transport):
    host.set_cache(image_cache_key(URL), {'corrupt': True})
    transport.respond(URL, Image.new('RGB', (4, 5)))
    img = host.get_image({'url': URL})
    assert img.size == (4, 5)
    assert host.get_cache(image_cache_key(URL)) is None
    assert len(transport.calls) == 1


def test_use_cache_false_skips_cache_lookup(host, transport):
    host.set_cache(image_cache_key(URL), 'leave me')
    transport.respond(URL, Image.new('RGB', (4, 5)))
    host.get_image({'url': URL, 'use_cache': False})
    assert host.get_cache(image_cache_key(URL)) == 'leave me'


def test_network_failure_returns_placeholder(host, transport):
    transport.fail(URL)
    assert is_placeholder(host.get_image({'url': URL}))


def test_non_image_response_returns_placeholder(host, transport):
    transport.respond(URL, b'<html>')
    assert is_placeholder(host.get_image({'url': URL}))


def test_stale_response_cache_is_used_when_network_fails(host, transport):
    transport.respond(URL, Image.new('RGB', (7, 7)))
    host.request({'url': URL, 'data_type': 'image'})
    transport.fail(URL)
    assert host.get_image({'url': URL, 'use_cache': False}).size == (7, 7)


def test_unexpected_errors_are_absorbed(host, monkeypatch):
    def explode(key):
        raise RuntimeError('disk gone')
    monkeypatch.setattr(host.cache, 'get', explode)
    assert is_placeholder(host.get_image(GetImageParams(url=URL)))


def test_resolver_uses_given_collaborators(host, transport):
    resolver = ImageResolver(host.http, host.cache)
    transport.respond(URL, Image.new('RGB', (1, 2)))
    assert resolver.get_image({'url': URL}).size == (1, 2)
    assert host.get_storage(cache_key_for(URL)) is not None
