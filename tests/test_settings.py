"""Tests for environment-backed settings."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from ledger_auth.settings import LedgerAuthSettings, get_settings

pytestmark = pytest.mark.usefixtures("clean_env")


def test_defaults() -> None:
    settings = get_settings()
    assert settings.log_level == "WARNING"
    assert settings.log_level_number == logging.WARNING
    assert settings.signing_seed is None


def test_log_level_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGER_AUTH_LOG_LEVEL", " debug ")
    settings = get_settings()
    assert settings.log_level == "DEBUG"
    assert settings.log_level_number == logging.DEBUG


def test_unknown_log_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGER_AUTH_LOG_LEVEL", "chatty")
    assert get_settings().log_level == "WARNING"


def test_seed_is_decoded_from_hex(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGER_AUTH_SIGNING_SEED", "ab" * 32)
    assert get_settings().signing_seed == b"\xab" * 32


def test_empty_seed_means_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LEDGER_AUTH_SIGNING_SEED", "")
    assert get_settings().signing_seed is None


@pytest.mark.parametrize("value", ["ab" * 31, "not-hex", "ab" * 33])
def test_invalid_seed_is_rejected(value: str) -> None:
    with pytest.raises(ValidationError):
        LedgerAuthSettings(LEDGER_AUTH_SIGNING_SEED=value)
