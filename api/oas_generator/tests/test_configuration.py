"""Tests for client configuration."""

from pathlib import Path

import pytest

from py_oas_generator.runtime import DEFAULT_TIMEOUT, Configuration


class TestConfiguration:
    def test_defaults(self) -> None:
        configuration = Configuration()

        assert configuration.base_url == "http://localhost"
        assert configuration.timeout == DEFAULT_TIMEOUT == 15.0
        assert configuration.access_token is None

    def test_api_key_prefix(self) -> None:
        configuration = Configuration(api_keys={"a": "k", "b": "k2"}, api_key_prefixes={"a": "Token"})

        assert configuration.api_key_for("a") == "Token k"
        assert configuration.api_key_for("b") == "k2"
        assert configuration.api_key_for("missing") is None

    def test_with_token_keeps_everything_else(self) -> None:
        configuration = Configuration(base_url="https://api.eu.svix.com", access_token="old", timeout=3.0)

        updated = configuration.with_token("new")

        assert updated.access_token == "new"
        assert updated.base_url == "https://api.eu.svix.com"
        assert updated.timeout == 3.0
        assert configuration.access_token == "old"


class TestFromEnv:
    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVIX_BASE_URL", "https://api.us.svix.com")
        monkeypatch.setenv("SVIX_TOKEN", "testsk_1")

        configuration = Configuration.from_env("SVIX", load_dotenv_file=False)

        assert configuration.base_url == "https://api.us.svix.com"
        assert configuration.access_token == "testsk_1"

    def test_overrides_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SVIX_TOKEN", "from_env")

        configuration = Configuration.from_env("SVIX", load_dotenv_file=False, access_token="explicit", timeout=None)

        assert configuration.access_token == "explicit"
        assert configuration.timeout is None

    def test_dotenv_file_does_not_override_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".env").write_text("PETSTORE_BASE_URL=https://dotenv.test\nPETSTORE_TOKEN=dotenv_token\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("PETSTORE_BASE_URL", raising=False)
        monkeypatch.setenv("PETSTORE_TOKEN", "env_token")

        configuration = Configuration.from_env("PETSTORE")

        assert configuration.base_url == "https://dotenv.test"
        assert configuration.access_token == "env_token"
        monkeypatch.delenv("PETSTORE_BASE_URL", raising=False)
