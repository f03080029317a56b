"""Configuration management via environment variables."""

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from sumosearch.endpoint import normalize_endpoint


class SumoSettings(BaseSettings):
    """
    Sumo Logic Search Job API configuration.

    All values are read from environment variables prefixed with SUMO_.
    A .env file in the current directory is loaded automatically.

    Attributes:
        api_access_base64: base64 of "access_id:access_key" (stored securely)
        api_host: Base API endpoint for your deployment
        timeout: Default per-request timeout in seconds

    Example:
        # Set environment variables:
        # SUMO_API_ACCESS_BASE64=c3VBQkNEOnNlY3JldA==
        # SUMO_API_HOST=https://api.us2.sumologic.com/api/v1/

        settings = SumoSettings()
        print(settings.endpoint_url)
    """

    api_access_base64: SecretStr
    api_host: str = "https://api.sumologic.com/api/v1/"
    timeout: float = 30.0

    model_config = SettingsConfigDict(
        env_prefix="SUMO_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def endpoint_url(self) -> str:
        """The API base URL, normalized so relative paths append to it."""
        return normalize_endpoint(self.api_host)
