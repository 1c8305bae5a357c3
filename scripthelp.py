"""Command-line access to the scripthelp helpers.

Handy for inspecting or seeding what scripts have stored:

    python scripthelp.py hash "url:https://example.com"
    python scripthelp.py storage set token '{"value": "abc"}'
    python scripthelp.py settings get theme --name my-widget
    python scripthelp.py request https://example.com/api --use-cache
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

from scripthelp_lib.config import DEFAULT_CONFIG_PATH, load_host_config
from scripthelp_lib.logging_config import configure_logging
from scripthelp_lib.main import create_host
from scripthelp_lib.host.image import is_image
from scripthelp_lib.net.models import RequestFailure
from scripthelp_lib.util import hash_string


def get_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog='scripthelp', description=__doc__.splitlines()[0])
    p.add_argument('--config', type=Path, default=DEFAULT_CONFIG_PATH, help='Path to host_config.yml')
    p.add_argument('--script', help='Script path whose secure store and settings are used')
    sub = p.add_subparsers(dest='command', required=True)

    h = sub.add_parser('hash', help='Print the storage key for a string')
    h.add_argument('text')

    s = sub.add_parser('storage', help='Read or write the key-value store')
    s.add_argument('action', choices=['get', 'set', 'remove'])
    s.add_argument('key')
    s.add_argument('value', nargs='?')
    s.add_argument('--scope', choices=['durable', 'temporary'], default='durable')

    st = sub.add_parser('settings', help='Read or write a settings document')
    st.add_argument('action', choices=['get', 'set'])
    st.add_argument('key')
    st.add_argument('value', nargs='?')
    st.add_argument('--name', help='Settings file name (defaults to the script name)')

    r = sub.add_parser('request', help='Issue a request through the caching client')
    r.add_argument('url')
    r.add_argument('--method', default='GET')
    r.add_argument('--data-type', choices=['json', 'text', 'image', 'data'], default='json')
    r.add_argument('--use-cache', action='store_true')

    i = sub.add_parser('image', help='Resolve an image and save it as PNG')
    i.add_argument('--url')
    i.add_argument('--filepath')
    i.add_argument('--no-cache', action='store_true')
    i.add_argument('--output', '-o', required=True)
    return p


def parse_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    return get_parser().parse_args(list(argv) if argv is not None else None)


def parse_value(raw: Optional[str]) -> Any:
    """JSON when it parses, the raw string otherwise."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _print(value: Any) -> None:
    if is_image(value):
        print(f"<image {value.size[0]}x{value.size[1]}>")
    elif isinstance(value, bytes):
        print(f"<{len(value)} bytes>")
    else:
        print(json.dumps(value, indent=2, ensure_ascii=False, default=str))


def main(argv: Optional[Iterable[str]] = None) -> int:
    args = parse_args(argv)
    if args.command == 'hash':
        print(hash_string(args.text))
        return 0

    configure_logging(args.config)
    config = load_host_config(args.config)
    if args.script:
        config.script_path = args.script
    host = create_host(config)

    if args.command == 'storage':
        store = host.storage if args.scope == 'durable' else host.cache
        if args.action == 'get':
            _print(store.get(args.key))
        elif args.action == 'set':
            store.set(args.key, parse_value(args.value))
        else:
            store.remove(args.key)
        return 0

    if args.command == 'settings':
        settings = host.use_setting(args.name)
        if args.action == 'get':
            _print(settings.get_settings(args.key))
        else:
            _print(settings.set_settings(args.key, parse_value(args.value)))
        return 0

    if args.command == 'request':
        res = host.request({
            'url': args.url,
            'method': args.method.upper(),
            'data_type': args.data_type,
            'use_cache': args.use_cache,
        })
        if isinstance(res, RequestFailure):
            print(f"Request failed: {res}", file=sys.stderr)
            return 1
        _print(res.status_code)
        _print(res.data)
        return 0

    if args.command == 'image':
        img = host.get_image({'url': args.url, 'filepath': args.filepath, 'use_cache': not args.no_cache})
        img.save(args.output, format='PNG')
        return 0

    return 2


if __name__ == '__main__':
    sys.exit(main())
