from __future__ import annotations

import pytest

from config import AppConfig

KEYS = ("GOOGLE_API_KEY", "GOOGLE_CX_ID", "GEMINI_API_KEY", "MAX_RESULTS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = AppConfig(_env_file=None)

    assert config.max_results == 12
    assert config.min_results == 5
    assert config.relevance_require_both is False
    assert config.google_search_enabled is False
    assert config.default_query == "vagas estágio desenvolvimento software região sul Brasil"


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "key")
    monkeypatch.setenv("GOOGLE_CX_ID", "cx")
    monkeypatch.setenv("MAX_RESULTS", "8")

    config = AppConfig(_env_file=None)

    assert config.google_search_enabled is True
    assert config.max_results == 8


def test_blank_keys_count_as_missing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEMINI_API_KEY", "   ")

    assert AppConfig(_env_file=None).gemini_api_key is None
