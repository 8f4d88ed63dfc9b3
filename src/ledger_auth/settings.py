"""Environment-backed settings primitives for :mod:`ledger_auth`."""

from __future__ import annotations

import logging

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["LedgerAuthSettings", "get_settings"]

_DEFAULT_LOG_LEVEL = "WARNING"


class LedgerAuthSettings(BaseSettings):
    """Expose environment-derived configuration knobs.

    Settings never influence the canonical encoding; they only control
    logging and where the reference key provider finds a stable seed.

    Attributes:
        log_level: Name of the level applied by
            :func:`ledger_auth.logging_pipeline.configure_structured_logging`
            when no explicit level is given. Unknown names fall back to
            ``WARNING``.
        signing_seed: Optional 32-byte Ed25519 seed, supplied as hex with an
            optional ``0x`` prefix.
    """

    log_level: str = Field(default=_DEFAULT_LOG_LEVEL, alias="LEDGER_AUTH_LOG_LEVEL")
    signing_seed: bytes | None = Field(default=None, alias="LEDGER_AUTH_SIGNING_SEED")

    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalise_log_level(cls, value: object) -> str:
        """Upper-case the level name, tolerating unknown values.

        Args:
            value: Raw environment value.

        Returns:
            A level name understood by :mod:`logging`.
        """

        if not isinstance(value, str):
            return _DEFAULT_LOG_LEVEL
        name = value.strip().upper()
        if isinstance(logging.getLevelName(name), int):
            return name
        return _DEFAULT_LOG_LEVEL

    @field_validator("signing_seed", mode="before")
    @classmethod
    def _parse_seed(cls, value: object) -> bytes | None:
        """Decode the hex seed, rejecting values of the wrong size."""

        if value in (None, ""):
            return None
        if isinstance(value, bytes):
            raw = value
        elif isinstance(value, str):
            text = value.strip()
            if text[:2] in ("0x", "0X"):
                text = text[2:]
            try:
                raw = bytes.fromhex(text)
            except ValueError as exc:
                raise ValueError("LEDGER_AUTH_SIGNING_SEED must be hex") from exc
        else:
            raise ValueError("LEDGER_AUTH_SIGNING_SEED must be a hex string")
        if len(raw) != 32:
            raise ValueError("LEDGER_AUTH_SIGNING_SEED must decode to 32 bytes")
        return raw

    @property
    def log_level_number(self) -> int:
        """Return the numeric logging level."""

        return logging.getLevelName(self.log_level)


def get_settings() -> LedgerAuthSettings:
    """Return a :class:`LedgerAuthSettings` instance.

    Returns:
        Settings parsed from environment variables.
    """

    return LedgerAuthSettings()
