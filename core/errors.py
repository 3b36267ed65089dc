"""
core/errors.py -- Error kinds raised by the token codec.

Every failure is local to a single encode/decode call. Nothing in core/ or
auth/ catches these; they propagate to the caller unchanged (the CLI in
main.py is the only place that turns them into messages).

All kinds derive from TokenError, which is a ValueError: a bad token is bad
input, and callers that already catch ValueError keep working.

Layer rule: core/ is the kernel. This module may not import from auth/.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any


class TokenError(ValueError):
    """Base class for every token encode/decode failure."""


class MalformedTokenError(TokenError):
    """The token does not split into exactly three dot-separated segments."""

    def __init__(self, segment_count: int) -> None:
        super().__init__(f"Malformed token: expected 3 segments, found {segment_count}.")
        self.segment_count = segment_count


class MalformedEncodingError(TokenError):
    """A segment is not valid Base64Url (bad padding remainder or alphabet)."""

    def __init__(self, message: str = "Invalid base64url string.") -> None:
        super().__init__(message)


class MalformedPayloadError(TokenError):
    """Decoded bytes are not a serialized JSON object."""

    def __init__(self, segment: str) -> None:
        super().__init__(f"Malformed token {segment}: expected a JSON object.")
        self.segment = segment


class UnsupportedAlgorithmError(TokenError):
    """The requested or advertised algorithm is not HS256/HS384/HS512."""

    def __init__(self, algorithm: Any) -> None:
        super().__init__(f"Algorithm not implemented: {algorithm}")
        self.algorithm = algorithm


class InvalidSignatureError(TokenError):
    """The signature segment does not match the recomputed signature.

    Both values are kept Base64Url-encoded for diagnostic display.
    """

    def __init__(self, invalid_signature: str, expected_signature: str) -> None:
        super().__init__("Invalid signature.")
        self.invalid_signature = invalid_signature
        self.expected_signature = expected_signature


class InvalidExpirationError(TokenError):
    """The exp claim is present but is not an integer epoch value."""

    def __init__(self, invalid_expiration: Any) -> None:
        super().__init__("Invalid expiration time.")
        self.invalid_expiration = invalid_expiration


class TokenExpiredError(TokenError):
    """The token's exp claim lies in the past."""

    def __init__(self, expired_on: datetime) -> None:
        super().__init__(f"Token expired on {expired_on.isoformat()}.")
        self.expired_on = expired_on


class InvalidClaimValueError(TokenError, TypeError):
    """A claim name is not a string, or its value is not a finite JSON scalar."""

    def __init__(self, claim: Any, value: Any) -> None:
        if isinstance(value, float):
            message = f"Claim {claim!r} has non-finite value {value!r}; JSON cannot represent it."
        else:
            message = (
                f"Claim {claim!r} has unsupported type {type(value).__name__}; "
                "expected str, bool, int, float or None."
            )
        super().__init__(message)
        self.claim = claim
        self.value = value
