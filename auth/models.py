"""
auth/models.py -- The decoded view of a token.

Pattern: frozen dataclass over read-only mapping proxies. The decoder builds
one TokenInformation per successful decode and nothing can change it
afterwards, so instances are safe to share between threads.

Expiration is evaluated lazily: decode() never looks at the clock. Reading
expires_on or has_expired parses the exp claim at that moment, and an
unparsable exp surfaces there as InvalidExpirationError.

Layer rule: no imports from main.py.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Optional

from core.claims import ClaimValue, RegisteredClaims, read_expiration
from core.errors import InvalidExpirationError, TokenExpiredError
from core.timestamps import to_datetime, to_epoch_seconds, utc_now

_EXP = RegisteredClaims.EXPIRATION_TIME.value


@dataclass(frozen=True, eq=False)
class TokenInformation:
    """Header and claims of a decoded token.

    header and claims are mappingproxy views over private copies; the dicts
    passed in can be mutated by the caller without affecting the instance.
    """

    header: Mapping[str, ClaimValue]
    claims: Mapping[str, ClaimValue]

    def __post_init__(self) -> None:
        object.__setattr__(self, "header", MappingProxyType(dict(self.header)))
        object.__setattr__(self, "claims", MappingProxyType(dict(self.claims)))

    @property
    def expires_on(self) -> Optional[datetime]:
        """UTC datetime of the exp claim, or None if the token never expires.

        Raises InvalidExpirationError when exp is unparsable or out of the
        representable datetime range.
        """
        expiration = read_expiration(self.claims)
        if expiration is None:
            return None
        try:
            return to_datetime(expiration)
        except OverflowError as exc:
            # A valid 64-bit exp can still lie outside datetime's years 1-9999.
            raise InvalidExpirationError(self.claims[_EXP]) from exc

    @property
    def has_expired(self) -> bool:
        expiration = read_expiration(self.claims)
        if expiration is None:
            return False
        return to_epoch_seconds(utc_now()) > expiration

    def raise_if_expired(self) -> None:
        """Raise TokenExpiredError if the exp claim lies in the past.

        For callers that prefer an exception over checking has_expired.
        """
        if self.has_expired:
            raise TokenExpiredError(self.expires_on)
