from __future__ import annotations
import logging
from typing import Callable

from PIL import Image

from scripthelp_lib.host.image import image_from_file

logger = logging.getLogger(__name__)


class PhotoLibrary:
    """Photo picker that asks for the path of an image on the console."""

    def __init__(self, input_func: Callable[[str], str] = input):
        self._input = input_func

    def from_library(self) -> Image.Image:
        while True:
            path = self._input('Path of the screenshot: ').strip()
            img = image_from_file(path)
            if img is not None:
                return img
            logger.warning("Not a readable image: %s", path)
