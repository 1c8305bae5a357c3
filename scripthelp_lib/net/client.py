"""HTTP helpers with a write-through response cache.

`HttpClient.request` serves `url:<url>` from the durable key-value store when
asked to, otherwise goes to the network and overwrites that entry with every
successful response. Failures never raise: a cached response is returned if
one exists, else a `RequestFailure` describing the error.
"""
from __future__ import annotations
import logging
from typing import Any, Callable, Dict, Optional, Union

from scripthelp_lib.config import DEFAULT_TIMEOUT_MS
from scripthelp_lib.host.interfaces import RequestProtocol
from scripthelp_lib.host.request import Request
from scripthelp_lib.net.models import (
    RequestFailure,
    RequestParams,
    RequestResult,
    ResponseType,
    UploadFileParams,
)
from scripthelp_lib.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)

_LOADERS = {
    'json': 'load_json',
    'text': 'load_string',
    'image': 'load_image',
    'data': 'load',
}


def cache_key_for(url: str) -> str:
    return f"url:{url}"


def load_body(req: RequestProtocol, data_type: str) -> Any:
    return getattr(req, _LOADERS.get(data_type, 'load_json'))()


class HttpClient:
    def __init__(
        self,
        storage: KeyValueStore,
        request_factory: Callable[[str], RequestProtocol] = Request,
        default_timeout_ms: float = DEFAULT_TIMEOUT_MS,
    ):
        self.storage = storage
        self.request_factory = request_factory
        self.default_timeout_ms = default_timeout_ms

    def _timeout_s(self, timeout_ms: Optional[float]) -> float:
        return (timeout_ms or self.default_timeout_ms) / 1000

    def _read_cache(self, url: str) -> Optional[ResponseType]:
        try:
            payload = self.storage.get(cache_key_for(url))
            if payload is None:
                return None
            return ResponseType.from_cache(payload)
        except Exception:
            logger.warning("Ignoring unreadable cached response for %s", url, exc_info=True)
            return None

    def request(self, params: Union[RequestParams, Dict[str, Any]]) -> RequestResult:
        params = RequestParams.model_validate(params)
        cache = self._read_cache(params.url)
        if params.use_cache and cache is not None:
            logger.debug("Serving %s from cache", params.url)
            return cache

        req = self.request_factory(params.url)
        req.method = params.method
        if params.header:
            req.headers = params.header
        if params.data:
            req.body = params.data
        req.timeout_interval = self._timeout_s(params.timeout)
        req.allow_insecure_request = True

        try:
            body = load_body(req, params.data_type)
            result = ResponseType(**req.response, data=body)
            self.storage.set(cache_key_for(params.url), result.to_cache())
            return result
        except Exception as err:
            if cache is not None:
                logger.warning("Request to %s failed, serving cached response: %s", params.url, err)
                return cache
            logger.warning("Request to %s failed: %s", params.url, err)
            return RequestFailure(url=params.url, error=err)

    def upload_file(self, params: Union[UploadFileParams, Dict[str, Any]]) -> RequestResult:
        params = UploadFileParams.model_validate(params)
        req = self.request_factory(params.url)
        if params.header:
            req.headers = params.header
        req.timeout_interval = self._timeout_s(params.timeout)

        try:
            if isinstance(params.file_path, str):
                req.add_file_to_multipart(params.file_path, params.name, params.filename)
            else:
                req.add_image_to_multipart(params.file_path, params.name, params.filename)
            for key, value in params.form_data.items():
                req.add_parameter_to_multipart(key, value)
            body = load_body(req, params.data_type)
            return ResponseType(**req.response, data=body)
        except Exception as err:
            logger.warning("Upload to %s failed: %s", params.url, err)
            return RequestFailure(url=params.url, error=err)
