#!/usr/bin/env python3
"""
compact-jwt -- Create and inspect HMAC-signed JSON Web Tokens.

Usage:
  python main.py encode --claim sub=1234567890 --claim admin=true
  python main.py encode --claim sub=alice --alg HS512 --expires-in 600
  python main.py encode --claim sub=alice --expires-in 0
  python main.py decode <TOKEN>
  python main.py decode <TOKEN> --no-verify

Environment variables:
  SECRET_KEY            Signing key (at least 32 characters). Required unless DEBUG=true.
  DEBUG                 Set to true to auto-generate a throwaway SECRET_KEY.
  DEFAULT_ALGORITHM     HS256 (default), HS384 or HS512.
  TOKEN_EXPIRE_SECONDS  Default lifetime for encode (3600). 0 = no exp claim.
  LOG_LEVEL             Logging level (WARNING).

decode exits with status 1 when the token is invalid or has expired.
"""

import argparse
import json
import logging
import sys
from datetime import timedelta
from typing import Any, Optional

from auth.models import TokenInformation
from auth.signing import Algorithm
from auth.tokens import create_token, decode
from core.claims import ClaimValue
from core.config import get_settings
from core.errors import TokenError
from core.timestamps import utc_now

logger = logging.getLogger("compactjwt.cli")


def _parse_claim(raw: str) -> tuple[str, ClaimValue]:
    """Split NAME=VALUE. VALUE is read as a JSON scalar when it is one, else kept as text.

    "admin=true" gives True, "n=3" gives 3, "sub=1234567890" gives the integer,
    'sub="1234567890"' keeps it a string.
    """
    name, sep, value = raw.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"'{raw}' is not in NAME=VALUE form")
    try:
        parsed = json.loads(value)
    except json.JSONDecodeError:
        return name, value
    if isinstance(parsed, (str, bool, int, float)) or parsed is None:
        return name, parsed
    return name, value


def _non_negative_int(raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{raw}' is not an integer") from None
    if value < 0:
        raise argparse.ArgumentTypeError("--expires-in must not be negative")
    return value


def _cmd_encode(args: argparse.Namespace) -> int:
    settings = get_settings()
    algorithm = args.alg or settings.default_algorithm
    expire_seconds = settings.token_expire_seconds if args.expires_in is None else args.expires_in

    claims: dict[str, ClaimValue] = dict(args.claim or [])
    expiration = utc_now() + timedelta(seconds=expire_seconds) if expire_seconds > 0 else None

    print(create_token(settings.key_bytes, claims, algorithm, expiration))
    return 0


def _describe(info: TokenInformation) -> dict[str, Any]:
    expires_on = info.expires_on
    return {
        "header": dict(info.header),
        "claims": dict(info.claims),
        "expires_on": expires_on.isoformat() if expires_on is not None else None,
        "has_expired": info.has_expired,
    }


def _cmd_decode(args: argparse.Namespace) -> int:
    key: Optional[bytes] = None
    if args.no_verify:
        print("  [!] Signature NOT verified -- claims below are untrusted.", file=sys.stderr)
    else:
        key = get_settings().key_bytes

    info = decode(args.token.strip(), key)
    print(json.dumps(_describe(info), indent=2))
    return 1 if info.has_expired else 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="compact-jwt",
        description="Create and inspect HMAC-signed JSON Web Tokens.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  SECRET_KEY=... python main.py encode --claim sub=alice --claim admin=true
  SECRET_KEY=... python main.py decode eyJhbGciOi...
  python main.py decode eyJhbGciOi... --no-verify
        """,
    )
    subparsers = parser.add_subparsers(dest="command")

    encode_parser = subparsers.add_parser("encode", help="Create a signed token")
    encode_parser.add_argument(
        "--claim",
        action="append",
        type=_parse_claim,
        metavar="NAME=VALUE",
        help="Claim to include (repeatable). VALUE is parsed as a JSON scalar when possible",
    )
    encode_parser.add_argument(
        "--alg",
        choices=[a.value for a in Algorithm],
        default=None,
        help="Signing algorithm (default: DEFAULT_ALGORITHM setting)",
    )
    encode_parser.add_argument(
        "--expires-in",
        type=_non_negative_int,
        default=None,
        metavar="SECONDS",
        help="Token lifetime in seconds; 0 for no exp claim (default: TOKEN_EXPIRE_SECONDS setting)",
    )

    decode_parser = subparsers.add_parser("decode", help="Decode and verify a token")
    decode_parser.add_argument("token", metavar="TOKEN", help="Encoded token")
    decode_parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Skip signature verification (no SECRET_KEY needed; claims are untrusted)",
    )

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
    except ValueError as e:
        if args.command == "decode" and args.no_verify:
            settings = None
        else:
            print(f"  [!] Configuration error: {e}", file=sys.stderr)
            return 1

    logging.basicConfig(level=settings.log_level.upper() if settings else logging.WARNING)

    handler = _cmd_encode if args.command == "encode" else _cmd_decode
    try:
        return handler(args)
    except TokenError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"  [!] {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
