"""
core/claims.py -- Claim names, claim value typing, and expiration handling.

Claims are an ordered dict (insertion order is serialization order) mapping
claim names to JSON scalars. Only "exp" carries meaning here; the other
registered names are reserved for the caller's own policy (audience,
issuer, replay checks), none of which is enforced by this package.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, MutableMapping
from datetime import datetime
from enum import Enum
from typing import Optional, Union

from core.errors import InvalidClaimValueError, InvalidExpirationError
from core.timestamps import to_epoch_seconds

ClaimValue = Union[str, bool, int, float, None]

_CLAIM_TYPES = (str, bool, int, float, type(None))

# Same acceptance as a signed 64-bit integer parse: optional sign, digits,
# surrounding whitespace, value within [_INT64_MIN, _INT64_MAX].
_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class RegisteredClaims(str, Enum):
    """Claim names registered in the IANA "JSON Web Token Claims" registry."""

    ISSUER = "iss"
    SUBJECT = "sub"
    AUDIENCE = "aud"
    EXPIRATION_TIME = "exp"
    NOT_BEFORE = "nbf"
    ISSUED_AT = "iat"
    JWT_ID = "jti"


_EXP = RegisteredClaims.EXPIRATION_TIME.value


def set_expiration(claims: MutableMapping[str, ClaimValue], expiration: Optional[datetime] = None) -> None:
    """Write expiration into claims["exp"] as epoch seconds.

    An existing exp is overwritten. With expiration=None the claims are left
    alone, so an exp the caller set by hand survives.
    """
    if expiration is not None:
        claims[_EXP] = to_epoch_seconds(expiration)


def read_expiration(claims: Mapping[str, ClaimValue]) -> Optional[int]:
    """Return the exp claim as epoch seconds, or None when there is none.

    A null exp counts as absent. Any other value that is not a signed 64-bit
    integer (or integral float, or integer text) raises InvalidExpirationError.
    """
    value = claims.get(_EXP)
    if value is None:
        return None
    if isinstance(value, bool):
        raise InvalidExpirationError(value)
    if isinstance(value, int):
        seconds = value
    elif isinstance(value, float) and value.is_integer():
        seconds = int(value)
    elif isinstance(value, str) and _INTEGER_RE.match(value):
        try:
            seconds = int(value)
        except ValueError as exc:
            # digit strings beyond the interpreter's int conversion limit
            raise InvalidExpirationError(value) from exc
    else:
        raise InvalidExpirationError(value)
    if not _INT64_MIN <= seconds <= _INT64_MAX:
        raise InvalidExpirationError(value)
    return seconds


def validate_claims(claims: Mapping[str, ClaimValue]) -> None:
    """Raise InvalidClaimValueError for the first claim that is not a str -> finite scalar pair."""
    for name, value in claims.items():
        if not isinstance(name, str) or not isinstance(value, _CLAIM_TYPES):
            raise InvalidClaimValueError(name, value)
        # NaN and Infinity have no JSON representation.
        if isinstance(value, float) and not math.isfinite(value):
            raise InvalidClaimValueError(name, value)
