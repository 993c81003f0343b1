"""Unit tests for application settings."""

from sprinkler_weather.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch):
        """Test defaults when the environment is empty."""
        monkeypatch.delenv("OWM_API_KEY", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = Settings(_env_file=None)

        assert settings.owm_api_key == ""
        assert settings.weather_api_base_url == "http://api.openweathermap.org/data/2.5"
        assert settings.geocode_api_url == "http://autocomplete.wunderground.com/aq"
        assert settings.http_timeout_seconds == 10.0
        assert settings.log_level == "INFO"

    def test_environment_override(self, monkeypatch):
        """Test values are read from upper-case environment variables."""
        monkeypatch.setenv("OWM_API_KEY", "from-env")
        monkeypatch.setenv("HTTP_TIMEOUT_SECONDS", "2.5")

        settings = Settings(_env_file=None)

        assert settings.owm_api_key == "from-env"
        assert settings.http_timeout_seconds == 2.5

    def test_get_settings_is_cached(self):
        """Test get_settings returns the same instance."""
        assert get_settings() is get_settings()
