import base64
import struct


def hash_string(text: str) -> str:
    """Return the storage key for `text` as ``hash_<signed int32>``.

    Polynomial rolling hash (base 31) over UTF-16 code units with 32-bit
    two's-complement wraparound, so astral characters contribute two units.
    """
    value = 0
    for (unit,) in struct.iter_unpack('<H', text.encode('utf-16-le')):
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 0x100000000
    return f"hash_{value}"


def base64_encode(text: str) -> str:
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def base64_decode(data: str) -> str:
    return base64.b64decode(data).decode('utf-8')
