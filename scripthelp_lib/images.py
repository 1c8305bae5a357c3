"""Resolve an image from a local file, the temporary cache or the network.

`ImageResolver.get_image` never raises; anything that goes wrong yields the
100x100 red placeholder.
"""
from __future__ import annotations
import logging
from typing import Any, Dict, Optional, Union

from PIL import Image
from pydantic import BaseModel

from scripthelp_lib.host.image import image_from_file, is_image, placeholder_image
from scripthelp_lib.net.client import HttpClient
from scripthelp_lib.net.models import RequestParams
from scripthelp_lib.storage.kv_store import KeyValueStore

logger = logging.getLogger(__name__)


class GetImageParams(BaseModel):
    filepath: Optional[str] = None
    url: Optional[str] = None
    # Read and write the temporary cache for network images
    use_cache: bool = True


def image_cache_key(url: str) -> str:
    return f"image:{url}"


class ImageResolver:
    def __init__(self, http: HttpClient, cache: KeyValueStore):
        self.http = http
        self.cache = cache

    def _resolve(self, params: GetImageParams) -> Image.Image:
        if params.filepath:
            return image_from_file(params.filepath) or placeholder_image()
        if not params.url:
            return placeholder_image()

        cache_key = image_cache_key(params.url)
        if params.use_cache:
            cached = self.cache.get(cache_key)
            if is_image(cached):
                return cached
            if cached is not None:
                logger.warning("Discarding non-image cache entry for %s", params.url)
            self.cache.remove(cache_key)

        res = self.http.request(RequestParams(url=params.url, data_type='image'))
        image = res.data
        if is_image(image):
            self.cache.set(cache_key, image)
            return image
        return placeholder_image()

    def get_image(self, params: Union[GetImageParams, Dict[str, Any], None] = None) -> Image.Image:
        try:
            return self._resolve(GetImageParams.model_validate(params or {}))
        except Exception:
            logger.exception("Failed to resolve image; using placeholder")
            return placeholder_image()
