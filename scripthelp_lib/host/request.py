"""HTTP transport primitive.

`Request` is a one-shot request object: configure its attributes, then call
one of the `load*` methods. After a load `response` holds the metadata of
the exchange. Transport errors, timeouts and decode failures raise.
"""
from __future__ import annotations
import json
import logging
import mimetypes
import os
from typing import Any, Dict, List, Optional, Tuple

import requests
from PIL import Image

from scripthelp_lib.host.image import image_from_bytes, image_to_bytes

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 60.0


class ImageDecodeError(ValueError):
    """Raised when a response body is not a decodable image."""


def _describe_cookies(jar) -> List[Dict[str, Any]]:
    cookies = []
    for c in jar:
        cookies.append({
            'path': c.path,
            'http_only': c.has_nonstandard_attr('HttpOnly'),
            'domain': c.domain,
            'session_only': c.discard or c.expires is None,
            'name': c.name,
            'value': c.value,
        })
    return cookies


class Request:
    def __init__(self, url: str, session: Optional[requests.Session] = None):
        self.url = url
        self.method = 'GET'
        self.headers: Dict[str, str] = {}
        self.body: Any = None
        self.timeout_interval = DEFAULT_TIMEOUT_S
        self.allow_insecure_request = False
        self.response: Dict[str, Any] = {}
        self._session = session or requests.Session()
        self._files: List[Tuple[str, Tuple[str, bytes, str]]] = []
        self._fields: Dict[str, str] = {}

    def add_file_to_multipart(self, file_path: str, name: str, filename: Optional[str] = None) -> None:
        with open(file_path, 'rb') as f:
            content = f.read()
        filename = filename or os.path.basename(file_path)
        mime = mimetypes.guess_type(file_path)[0] or 'application/octet-stream'
        self._files.append((name, (filename, content, mime)))

    def add_image_to_multipart(self, image: Image.Image, name: str, filename: Optional[str] = None) -> None:
        self._files.append((name, (filename or 'image.jpg', image_to_bytes(image, 'JPEG'), 'image/jpeg')))

    def add_parameter_to_multipart(self, name: str, value: str) -> None:
        self._fields[name] = value

    def _encode_body(self) -> Tuple[Any, Dict[str, str]]:
        body = self.body
        if body is None or isinstance(body, (bytes, str)):
            return body, {}
        # Structured bodies go out as JSON
        extra = {} if any(k.lower() == 'content-type' for k in self.headers) else {'Content-Type': 'application/json'}
        return json.dumps(body), extra

    def _send(self) -> requests.Response:
        headers = dict(self.headers)
        method = self.method
        kwargs: Dict[str, Any] = {}
        if self._files or self._fields:
            if method == 'GET':
                method = 'POST'
            kwargs['files'] = self._files or None
            kwargs['data'] = self._fields
        else:
            data, extra = self._encode_body()
            headers.update(extra)
            kwargs['data'] = data

        logger.debug("%s %s", method, self.url)
        resp = self._session.request(
            method,
            self.url,
            headers=headers or None,
            timeout=self.timeout_interval,
            verify=not self.allow_insecure_request,
            **kwargs,
        )
        self.response = {
            'url': resp.url or self.url,
            'status_code': resp.status_code,
            'mime_type': (resp.headers.get('Content-Type') or '').split(';')[0].strip(),
            'text_encoding_name': resp.encoding or '',
            'headers': dict(resp.headers),
            'cookies': _describe_cookies(resp.cookies),
        }
        return resp

    def load(self) -> bytes:
        return self._send().content

    def load_string(self) -> str:
        return self._send().text

    def load_json(self) -> Any:
        return self._send().json()

    def load_image(self) -> Image.Image:
        img = image_from_bytes(self._send().content)
        if img is None:
            raise ImageDecodeError(f"Response from {self.url} is not an image")
        return img
