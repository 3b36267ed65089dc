"""
auth/signing.py -- HMAC signatures over the encoded header and claims.

The signing input is the ASCII text "{encoded_header}.{encoded_claims}" --
the still-encoded segments, never the decoded mappings -- so a verifier
recomputes over exactly the bytes it received.

Security design decisions:
  Comparison: verify() uses hmac.compare_digest so the time taken does not
       reveal how many leading characters of a forged signature were right.

  Algorithms: only the HMAC family is supported. Anything else (RS256, none,
       a typo) is an UnsupportedAlgorithmError naming the value, never a
       silent fallback to a default.

Layer rule: auth/ may import from core/, never the reverse.
"""

from __future__ import annotations

import hashlib
import hmac
from enum import Enum
from typing import Any, Callable

from core import base64url
from core.errors import UnsupportedAlgorithmError


class Algorithm(str, Enum):
    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"

    @property
    def digestmod(self) -> Callable[..., Any]:
        return _DIGESTS[self]

    @classmethod
    def parse(cls, value: Any) -> Algorithm:
        """Return the Algorithm for an enum member or its name.

        Raises UnsupportedAlgorithmError for anything else, including None
        (a header with no "alg" entry).
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError as exc:
            raise UnsupportedAlgorithmError(value) from exc


_DIGESTS = {
    Algorithm.HS256: hashlib.sha256,
    Algorithm.HS384: hashlib.sha384,
    Algorithm.HS512: hashlib.sha512,
}


def _signing_input(encoded_header: str, encoded_claims: str) -> bytes:
    return f"{encoded_header}.{encoded_claims}".encode("ascii")


def sign(algorithm: Algorithm | str, key: bytes, encoded_header: str, encoded_claims: str) -> bytes:
    """Return the raw MAC of the signing input under key."""
    algorithm = Algorithm.parse(algorithm)
    return hmac.new(key, _signing_input(encoded_header, encoded_claims), algorithm.digestmod).digest()


def encoded_signature(algorithm: Algorithm | str, key: bytes, encoded_header: str, encoded_claims: str) -> str:
    """Return the signature as it appears in the third token segment."""
    return base64url.encode(sign(algorithm, key, encoded_header, encoded_claims))


def verify(
    algorithm: Algorithm | str,
    key: bytes,
    encoded_header: str,
    encoded_claims: str,
    signature: str,
) -> bool:
    """Return True if signature (Base64Url text) is the expected signature.

    The comparison runs in fixed time over the encoded bytes, so two
    different encodings of the same MAC never compare equal.
    """
    expected = encoded_signature(algorithm, key, encoded_header, encoded_claims)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
