"""Client configuration.

Connection settings for a Space server, plus the retry and paging knobs
that are otherwise left at their defaults.

Example:
    >>> config = SpaceConfig(domain="example.jetbrains.space", client_id="id", client_secret="s")
    >>> config.base_url
    'https://example.jetbrains.space'
"""

from __future__ import annotations

import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 0.2
DEFAULT_CHUNK_SIZE = 20
DEFAULT_MAX_PAGES = 1000

TOKEN_ENDPOINT = "/oauth/token"
TOKEN_REQUEST_BODY = "grant_type=client_credentials&scope=**"


class SpaceConfig(BaseModel):
    """Settings for one Space server."""

    domain: str = Field(..., min_length=1)
    client_id: str = Field(..., min_length=1)
    client_secret: SecretStr
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    max_attempts: int = Field(DEFAULT_MAX_ATTEMPTS, ge=1)
    base_delay: float = Field(DEFAULT_BASE_DELAY, ge=0)
    chunk_size: int = Field(DEFAULT_CHUNK_SIZE, ge=1)
    max_pages: int = Field(DEFAULT_MAX_PAGES, ge=1)

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    @field_validator("domain")
    @classmethod
    def strip_scheme(cls, v: str) -> str:
        """Accept ``https://host/`` as well as a bare host name."""
        for scheme in ("https://", "http://"):
            if v.startswith(scheme):
                v = v[len(scheme) :]
        return v.rstrip("/")

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}"

    @classmethod
    def from_env(
        cls, prefix: str = "SPACE_", environ: Mapping[str, str] | None = None
    ) -> SpaceConfig:
        """Build a config from environment variables.

        Required: ``{prefix}DOMAIN``, ``{prefix}CLIENT_ID``, ``{prefix}CLIENT_SECRET``.
        Optional: ``{prefix}TIMEOUT``, ``{prefix}MAX_ATTEMPTS``, ``{prefix}BASE_DELAY``,
        ``{prefix}CHUNK_SIZE``, ``{prefix}MAX_PAGES``.

        Raises:
            ValueError: If a required variable is missing
        """
        env = os.environ if environ is None else environ
        missing = [
            f"{prefix}{name}"
            for name in ("DOMAIN", "CLIENT_ID", "CLIENT_SECRET")
            if not env.get(f"{prefix}{name}")
        ]
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

        values: dict[str, object] = {
            "domain": env[f"{prefix}DOMAIN"],
            "client_id": env[f"{prefix}CLIENT_ID"],
            "client_secret": env[f"{prefix}CLIENT_SECRET"],
        }
        for name in ("timeout", "max_attempts", "base_delay", "chunk_size", "max_pages"):
            raw = env.get(f"{prefix}{name.upper()}")
            if raw:
                values[name] = raw
        return cls.model_validate(values)
