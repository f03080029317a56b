"""Tests for sumosearch.config module."""

import pytest
from pydantic import ValidationError

from sumosearch.config import SumoSettings


class TestSumoSettings:
    """Tests for SumoSettings configuration."""

    def test_loads_from_explicit_values(self):
        """Settings can be created with explicit values."""
        settings = SumoSettings(
            api_access_base64="bXlpZDpteWtleQ==",
            api_host="https://api.us2.sumologic.com/api/v1/",
            timeout=10.0,
        )

        assert settings.api_access_base64.get_secret_value() == "bXlpZDpteWtleQ=="
        assert settings.api_host == "https://api.us2.sumologic.com/api/v1/"
        assert settings.timeout == 10.0

    def test_endpoint_url_is_normalized(self, mock_settings):
        """endpoint_url always ends with a single slash."""
        assert mock_settings.endpoint_url == "https://api.sumologic.test/api/v1/"

    def test_defaults(self, monkeypatch):
        """api_host and timeout have defaults."""
        monkeypatch.delenv("SUMO_API_HOST", raising=False)
        monkeypatch.delenv("SUMO_TIMEOUT", raising=False)

        settings = SumoSettings(api_access_base64="x")

        assert settings.api_host == "https://api.sumologic.com/api/v1/"
        assert settings.timeout == 30.0

    def test_secret_is_masked_in_repr(self, mock_settings):
        """The access credential should not appear in string representation."""
        repr_str = repr(mock_settings)
        assert "dGVzdC1pZDp0ZXN0LWtleQ==" not in repr_str
        assert "**********" in repr_str or "SecretStr" in repr_str

    def test_missing_required_field_raises_error(self, monkeypatch):
        """Missing credential raises ValidationError."""
        monkeypatch.delenv("SUMO_API_ACCESS_BASE64", raising=False)

        with pytest.raises(ValidationError):
            SumoSettings()

    def test_loads_from_environment_variables(self, monkeypatch):
        """Settings load from SUMO_* environment variables."""
        monkeypatch.setenv("SUMO_API_ACCESS_BASE64", "ZW52OmtleQ==")
        monkeypatch.setenv("SUMO_API_HOST", "https://api.au.sumologic.com/api/v1")
        monkeypatch.setenv("SUMO_TIMEOUT", "5")

        settings = SumoSettings()

        assert settings.api_access_base64.get_secret_value() == "ZW52OmtleQ=="
        assert settings.endpoint_url == "https://api.au.sumologic.com/api/v1/"
        assert settings.timeout == 5.0
