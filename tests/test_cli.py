"""
tests/test_cli.py -- Tests for the main.py encode/decode commands.

main() is called in-process with an argv list; output is captured with
capsys. The cli_env fixture pins SECRET_KEY and clears the settings cache.
"""

from __future__ import annotations

import argparse
import json

import pytest

from auth.tokens import create_token, decode
from main import _parse_claim, main


def _encode(capsys, *args: str) -> str:
    assert main(["encode", *args]) == 0
    return capsys.readouterr().out.strip()


class TestParseClaim:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("admin=true", ("admin", True)),
            ("n=3", ("n", 3)),
            ("ratio=0.5", ("ratio", 0.5)),
            ("gone=null", ("gone", None)),
            ('sub="123"', ("sub", "123")),
            ("name=John Doe", ("name", "John Doe")),
            ("list=[1,2]", ("list", "[1,2]")),
            ("eq=a=b", ("eq", "a=b")),
        ],
    )
    def test_values(self, raw, expected):
        assert _parse_claim(raw) == expected

    @pytest.mark.parametrize("raw", ["novalue", "=x"])
    def test_bad_form(self, raw):
        with pytest.raises(argparse.ArgumentTypeError, match="NAME=VALUE"):
            _parse_claim(raw)


class TestEncodeCommand:
    def test_claims_and_default_expiry(self, cli_env, capsys):
        token = _encode(capsys, "--claim", "sub=alice", "--claim", "admin=true")
        info = decode(token, cli_env.encode())
        assert info.claims["sub"] == "alice"
        assert info.claims["admin"] is True
        assert info.expires_on is not None
        assert info.has_expired is False

    def test_no_expiry(self, cli_env, capsys):
        token = _encode(capsys, "--claim", "sub=alice", "--expires-in", "0")
        assert dict(decode(token, cli_env.encode()).claims) == {"sub": "alice"}

    def test_negative_expiry_rejected(self, cli_env, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["encode", "--expires-in", "-5"])
        assert exc_info.value.code == 2
        assert "must not be negative" in capsys.readouterr().err

    def test_non_finite_claim_rejected(self, cli_env, capsys):
        assert main(["encode", "--claim", "ratio=NaN"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "non-finite value nan" in captured.err

    def test_algorithm_flag(self, cli_env, capsys):
        token = _encode(capsys, "--alg", "HS512")
        assert decode(token, cli_env.encode()).header["alg"] == "HS512"

    def test_default_algorithm_setting(self, cli_env, capsys, monkeypatch):
        monkeypatch.setenv("DEFAULT_ALGORITHM", "HS384")
        token = _encode(capsys)
        assert decode(token, cli_env.encode()).header["alg"] == "HS384"

    def test_missing_secret_in_production(self, capsys, monkeypatch):
        from core.config import get_settings

        monkeypatch.setenv("DEBUG", "false")
        monkeypatch.setenv("SECRET_KEY", "")
        get_settings.cache_clear()
        try:
            assert main(["encode"]) == 1
        finally:
            get_settings.cache_clear()
        assert "SECRET_KEY is required" in capsys.readouterr().err


class TestDecodeCommand:
    def test_valid_token(self, cli_env, capsys):
        token = create_token(cli_env.encode(), {"sub": "alice"})
        assert main(["decode", token]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["header"] == {"alg": "HS256", "typ": "JWT"}
        assert out["claims"] == {"sub": "alice"}
        assert out["expires_on"] is None
        assert out["has_expired"] is False

    def test_expired_token_exits_nonzero(self, cli_env, capsys):
        token = create_token(cli_env.encode(), {"exp": 1})
        assert main(["decode", token]) == 1
        out = json.loads(capsys.readouterr().out)
        assert out["has_expired"] is True
        assert out["expires_on"] == "1970-01-01T00:00:01+00:00"

    def test_bad_signature(self, cli_env, capsys, reference_token):
        assert main(["decode", reference_token]) == 1
        assert "Invalid signature." in capsys.readouterr().err

    def test_no_verify(self, cli_env, capsys, reference_token):
        assert main(["decode", reference_token, "--no-verify"]) == 0
        captured = capsys.readouterr()
        assert "NOT verified" in captured.err
        assert json.loads(captured.out)["claims"]["name"] == "John Doe"

    def test_malformed_token(self, cli_env, capsys):
        assert main(["decode", "not-a-token"]) == 1
        assert "expected 3 segments" in capsys.readouterr().err

    def test_exp_beyond_int64_reported(self, cli_env, capsys):
        token = create_token(cli_env.encode(), {"exp": 10**20})
        assert main(["decode", token]) == 1
        assert "Invalid expiration time." in capsys.readouterr().err


def test_no_command_prints_help(capsys):
    assert main([]) == 0
    assert "encode" in capsys.readouterr().out
