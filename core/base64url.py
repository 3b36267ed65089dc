"""
core/base64url.py -- URL-safe Base64 without padding.

Tokens travel in URLs and headers, so '+' and '/' become '-' and '_' and the
trailing '=' padding is dropped. decode() restores the padding from the
length remainder; a remainder of 1 can never come out of encode() and is
rejected.
"""

import base64
import binascii

from core.errors import MalformedEncodingError

_PADDING = {0: "", 2: "==", 3: "="}


def encode(data: bytes) -> str:
    """Return the Base64Url text of data, without padding."""
    output = base64.b64encode(data).decode("ascii")
    output = output.rstrip("=")
    return output.replace("+", "-").replace("/", "_")


def decode(data: str) -> bytes:
    """Return the bytes encoded in a Base64Url string.

    Raises MalformedEncodingError when the length remainder is 1 or the text
    contains characters outside the Base64 alphabet.
    """
    output = data.replace("-", "+").replace("_", "/")
    padding = _PADDING.get(len(output) % 4)
    if padding is None:
        raise MalformedEncodingError()
    try:
        return base64.b64decode(output + padding, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise MalformedEncodingError() from exc
