"""
core/config.py -- Centralized configuration via pydantic-settings.

Only the host side (main.py) reads configuration. The codec itself takes its
key and algorithm as explicit arguments and never calls get_settings(), so
library users are not forced into environment-based configuration.

Design patterns used:
  Singleton via lru_cache: get_settings() instantiates Settings once at first
      call and returns the cached instance afterwards.

  BaseSettings (pydantic-settings): values come from environment variables and
      an optional .env file. Field names map to env var names
      (secret_key -> SECRET_KEY, default_algorithm -> DEFAULT_ALGORITHM).

  @model_validator(mode="after"): cross-field secret-key policy. Dev mode
      generates a key with a warning, production mode refuses to start
      without one.

Security notes:
  SECRET_KEY shorter than 32 chars is rejected outright. HMAC signatures are
  only as strong as the key's entropy.

Layer rule: core/ is the kernel. This module may not import from auth/.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("compactjwt.config")

_ALGORITHMS = ("HS256", "HS384", "HS512")


class Settings(BaseSettings):
    """Settings loaded from environment variables and .env file.

    All fields have defaults so Settings() can be instantiated in tests
    without a real .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ------------------------------------------------------------------
    # Core
    # ------------------------------------------------------------------

    debug: bool = False
    # Empty string is the sentinel for "not configured". The model_validator
    # below either generates a dev key or raises, so callers never see "".
    secret_key: str = ""
    log_level: str = "WARNING"

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    default_algorithm: str = "HS256"
    # 0 means tokens are issued without an exp claim.
    token_expire_seconds: int = 3600

    # ------------------------------------------------------------------
    # Validators
    # ------------------------------------------------------------------

    @field_validator("default_algorithm")
    @classmethod
    def validate_algorithm(cls, value: str) -> str:
        value = value.upper()
        if value not in _ALGORITHMS:
            raise ValueError(f"DEFAULT_ALGORITHM must be one of {', '.join(_ALGORITHMS)}.")
        return value

    @field_validator("token_expire_seconds")
    @classmethod
    def validate_expire_seconds(cls, value: int) -> int:
        if value < 0:
            raise ValueError("TOKEN_EXPIRE_SECONDS must not be negative.")
        return value

    @model_validator(mode="after")
    def validate_secret_key(self) -> "Settings":
        """Enforce the SECRET_KEY policy.

        Dev mode (DEBUG=true): auto-generate a random key with a warning.
            Tokens signed with it stop verifying after a restart.

        Production mode (DEBUG=false or not set): refuse to start if
            SECRET_KEY is missing.

        Both modes: reject keys shorter than 32 characters.
        """
        if not self.secret_key:
            if self.debug:
                self.secret_key = secrets.token_hex(32)
                logger.warning(
                    "WARNING: Using auto-generated SECRET_KEY. " "Tokens will not verify across restarts."
                )
            else:
                raise ValueError(
                    "SECRET_KEY is required in production mode. "
                    "Set SECRET_KEY in your environment or .env file. "
                    "To run in development mode, set DEBUG=true."
                )
        if len(self.secret_key) < 32:
            raise ValueError("SECRET_KEY must be at least 32 characters.")
        return self

    @property
    def key_bytes(self) -> bytes:
        return self.secret_key.encode("utf-8")


@lru_cache
def get_settings() -> Settings:
    """Return the Settings singleton.

    In tests: call get_settings.cache_clear() between test cases if you need
    to inject different environment variables.
    """
    return Settings()
