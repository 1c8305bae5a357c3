from __future__ import annotations
import base64
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from PIL import Image
from pydantic import BaseModel, ConfigDict, Field

from scripthelp_lib.host.image import image_from_bytes, image_to_bytes, is_image


HttpMethod = Literal['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS', 'HEAD', 'TRACE', 'CONNECT']
DataType = Literal['json', 'text', 'image', 'data']

# Stored beside `data` in cached responses; says how the body was encoded
DATA_KIND_FIELD = 'data_kind'


def _now_millis() -> str:
    return str(int(time.time() * 1000))


class RequestParams(BaseModel):
    url: str
    data: Any = None
    header: Optional[Dict[str, str]] = None
    method: HttpMethod = 'GET'
    # milliseconds; None uses the client default
    timeout: Optional[float] = Field(default=None, gt=0)
    data_type: DataType = 'json'
    # Serve a previously cached response without touching the network
    use_cache: bool = False


class UploadFileParams(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    file_path: Union[str, Image.Image]
    name: str
    filename: str = Field(default_factory=_now_millis)
    header: Optional[Dict[str, str]] = None
    form_data: Dict[str, str] = Field(default_factory=dict)
    timeout: Optional[float] = Field(default=None, gt=0)
    data_type: DataType = 'json'


class Cookie(BaseModel):
    path: str = '/'
    http_only: bool = False
    domain: str = ''
    session_only: bool = True
    name: str
    value: str = ''


def encode_body(data: Any) -> Tuple[str, Any]:
    """Make a decoded response body JSON-safe for the secure store.

    Returns the body kind ('json', 'image' or 'data') and the encoded body;
    image and byte bodies become base64 text, everything else is kept as is.
    """
    if is_image(data):
        return 'image', base64.b64encode(image_to_bytes(data)).decode('ascii')
    if isinstance(data, (bytes, bytearray)):
        return 'data', base64.b64encode(bytes(data)).decode('ascii')
    return 'json', data


def decode_body(kind: Optional[str], data: Any) -> Any:
    if kind == 'image':
        return image_from_bytes(base64.b64decode(data))
    if kind == 'data':
        return base64.b64decode(data)
    return data


class ResponseType(BaseModel):
    """HTTP metadata of an exchange merged with its decoded body."""

    url: str = ''
    status_code: int = 0
    mime_type: str = ''
    text_encoding_name: str = ''
    headers: Dict[str, str] = Field(default_factory=dict)
    cookies: List[Cookie] = Field(default_factory=list)
    data: Any = None

    def to_cache(self) -> Dict[str, Any]:
        payload = self.model_dump(exclude={'data'})
        payload[DATA_KIND_FIELD], payload['data'] = encode_body(self.data)
        return payload

    @classmethod
    def from_cache(cls, payload: Dict[str, Any]) -> "ResponseType":
        values = dict(payload)
        kind = values.pop(DATA_KIND_FIELD, None)
        values['data'] = decode_body(kind, values.get('data'))
        return cls.model_validate(values)


@dataclass
class RequestFailure:
    """Returned instead of a response when a request fails with nothing cached."""

    url: str
    error: Exception
    data: None = None

    def __str__(self) -> str:
        return f"{self.url}: {self.error}"


RequestResult = Union[ResponseType, RequestFailure]
