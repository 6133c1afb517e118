"""Tests for reading connection settings from the environment."""

import pytest
from valencehelper.config import ValenceConfig
from valencehelper.exceptions import ConfigurationError

ENVIRON = {
    "D2L_VALENCE_APP_ID": "app-id",
    "D2L_VALENCE_APP_KEY": "app-key",
    "D2L_VALENCE_USER_ID": "user-id",
    "D2L_VALENCE_USER_KEY": "user-key",
    "D2L_VALENCE_HOST": "lms.example.edu",
}


class TestFromEnviron:
    def test_defaults(self) -> None:
        config = ValenceConfig.from_environ(ENVIRON)

        assert config.app_id == "app-id"
        assert config.user_key == "user-key"
        assert config.port == 443
        assert config.scheme == "https"
        assert config.base_url == "https://lms.example.edu"

    def test_port_and_scheme(self) -> None:
        config = ValenceConfig.from_environ(
            {**ENVIRON, "D2L_VALENCE_PORT": "8080", "D2L_VALENCE_SCHEME": "HTTP"}
        )

        assert config.port == 8080
        assert config.scheme == "http"
        assert config.base_url == "http://lms.example.edu:8080"

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key, value in ENVIRON.items():
            monkeypatch.setenv(key, value)
        monkeypatch.delenv("D2L_VALENCE_PORT", raising=False)
        monkeypatch.delenv("D2L_VALENCE_SCHEME", raising=False)

        assert ValenceConfig.from_environ().host == "lms.example.edu"

    def test_missing_variables_are_listed(self) -> None:
        environ = dict(ENVIRON)
        del environ["D2L_VALENCE_APP_KEY"]
        del environ["D2L_VALENCE_HOST"]

        with pytest.raises(ConfigurationError) as excinfo:
            ValenceConfig.from_environ(environ)

        assert "D2L_VALENCE_APP_KEY" in str(excinfo.value)
        assert "D2L_VALENCE_HOST" in str(excinfo.value)

    def test_bad_port(self) -> None:
        with pytest.raises(ConfigurationError, match="PORT"):
            ValenceConfig.from_environ({**ENVIRON, "D2L_VALENCE_PORT": "https"})
