"""
auth/tokens.py -- Create and decode signed tokens.

Token layout: BASE64URL(header-json) "." BASE64URL(claims-json) "." BASE64URL(signature)

Design decisions:
  Serialization: json.dumps with compact separators and insertion order. The
       header is always {"alg": ..., "typ": "JWT"} in that order, so the same
       claims, algorithm, key and expiration always give the same token.

  Claims ownership: create_token() works on a copy. The caller's dict is never
       mutated, even when an expiration is injected into it.

  Verification: decode(token, key) recomputes the signature over the raw
       encoded segments and compares in fixed time (auth/signing.py). A
       mismatch raises InvalidSignatureError carrying both encoded values.

  No key, no trust: decode(token) without a key only parses. The returned
       claims are unverified and must not be used for authorization.

  Expiration: checked lazily on TokenInformation (has_expired / expires_on /
       raise_if_expired). decode() accepts expired tokens and tokens with an
       unparsable exp; the latter fails when exp is read.

Layer rule: auth/ may import from core/, never the reverse.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Optional

from auth.models import TokenInformation
from auth.signing import Algorithm, encoded_signature, verify
from core import base64url
from core.claims import ClaimValue, set_expiration, validate_claims
from core.errors import InvalidSignatureError, MalformedPayloadError, MalformedTokenError

logger = logging.getLogger("compactjwt.tokens")

TOKEN_TYPE = "JWT"

# ---------------------------------------------------------------------------
# Serialization helpers
# ---------------------------------------------------------------------------


def _serialize(mapping: Mapping[str, Any]) -> str:
    return base64url.encode(json.dumps(mapping, separators=(",", ":")).encode("utf-8"))


def _deserialize(segment: str, name: str) -> dict[str, Any]:
    """Base64Url-decode and JSON-parse one segment into a dict.

    MalformedEncodingError from the Base64Url layer propagates unchanged.
    """
    raw = base64url.decode(segment)
    try:
        value = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedPayloadError(name) from exc
    if not isinstance(value, dict):
        raise MalformedPayloadError(name)
    return value


# ---------------------------------------------------------------------------
# Encode
# ---------------------------------------------------------------------------


def create_token(
    key: bytes,
    claims: Optional[Mapping[str, ClaimValue]] = None,
    algorithm: Algorithm | str = Algorithm.HS256,
    expiration: Optional[datetime] = None,
) -> str:
    """Return a signed token for claims.

    Args:
        key:        HMAC key bytes.
        claims:     Claim name -> str/bool/int/float/None. None means no claims.
        algorithm:  Algorithm member or name ("HS256", "HS384", "HS512").
        expiration: When given, written to the exp claim as epoch seconds,
                    replacing any exp already present in claims.

    Raises UnsupportedAlgorithmError for an unknown algorithm and
    InvalidClaimValueError for a claim that is not a JSON scalar.
    """
    algorithm = Algorithm.parse(algorithm)
    payload: dict[str, ClaimValue] = dict(claims) if claims is not None else {}
    header = {"alg": algorithm.value, "typ": TOKEN_TYPE}

    set_expiration(payload, expiration)
    validate_claims(payload)

    encoded_header = _serialize(header)
    encoded_claims = _serialize(payload)
    signature = encoded_signature(algorithm, key, encoded_header, encoded_claims)

    logger.debug("Created %s token with %d claim(s)", algorithm.value, len(payload))
    return f"{encoded_header}.{encoded_claims}.{signature}"


# ---------------------------------------------------------------------------
# Decode
# ---------------------------------------------------------------------------


def decode(token: str, key: Optional[bytes] = None) -> TokenInformation:
    """Decode token and, when key is given, verify its signature.

    Without a key the signature is not checked at all: the result is whatever
    the token claims, with no guarantee of who produced it.

    Raises:
        MalformedTokenError:       not exactly three segments.
        MalformedEncodingError:    header or claims segment is not Base64Url.
        MalformedPayloadError:     header or claims is not a JSON object.
        UnsupportedAlgorithmError: key given and header "alg" is missing/unknown.
        InvalidSignatureError:     key given and the signature does not match.
    """
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedTokenError(len(parts))
    encoded_header, encoded_claims, signature = parts

    header = _deserialize(encoded_header, "header")
    claims = _deserialize(encoded_claims, "claims")

    if key is None:
        logger.debug("Decoded token without a key; claims are unverified")
        return TokenInformation(header, claims)

    algorithm = Algorithm.parse(header.get("alg"))
    if not verify(algorithm, key, encoded_header, encoded_claims, signature):
        logger.debug("Signature mismatch for %s token", algorithm.value)
        raise InvalidSignatureError(signature, encoded_signature(algorithm, key, encoded_header, encoded_claims))

    return TokenInformation(header, claims)
