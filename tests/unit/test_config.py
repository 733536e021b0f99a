"""Unit tests for configuration management."""

import pytest

from recipe_service.utils.config import Config


POLICY_VARS = (
    "AI_MODELS",
    "MAX_RETRIES_PER_MODEL",
    "RETRY_DELAY_SECONDS",
    "RECIPES_PER_REQUEST",
    "PANTRY_STAPLES",
    "TRANSLATE_INGREDIENTS",
    "TEMPERATURE",
    "MAX_OUTPUT_TOKENS",
    "PEXELS_API_URL",
    "PLACEHOLDER_IMAGE_URL",
    "IMAGE_SEARCH_TIMEOUT_SECONDS",
    "PORT",
    "CORS_ORIGINS",
)


@pytest.fixture
def required_keys(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "key")
    monkeypatch.setenv("RECIPE_SIGNING_SECRET", "secret")


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, monkeypatch):
        """Test that Config uses default values when env vars not set."""
        for name in POLICY_VARS:
            monkeypatch.delenv(name, raising=False)

        config = Config()

        assert config.AI_MODELS == ["gemini-2.5-flash", "gemini-2.5-flash-lite", "gemini-2.0-flash"]
        assert config.MAX_RETRIES_PER_MODEL == 5
        assert config.RETRY_DELAY_SECONDS == 1.0
        assert config.RECIPES_PER_REQUEST == 4
        assert "olive oil" in config.PANTRY_STAPLES
        assert len(config.PANTRY_STAPLES) == 13
        assert config.TRANSLATE_INGREDIENTS is True
        assert config.TEMPERATURE == 0.7
        assert config.MAX_OUTPUT_TOKENS == 4096
        assert config.PEXELS_API_URL == "https://api.pexels.com/v1/search"
        assert config.PLACEHOLDER_IMAGE_URL.endswith("Image-not-available_1-800x800.jpg")
        assert config.PORT == 7777
        assert config.CORS_ORIGINS == ["http://localhost:5173"]

    def test_config_loads_from_environment(self, monkeypatch):
        """Test that Config loads values from environment variables."""
        monkeypatch.setenv("AI_MODELS", "model-a, model-b")
        monkeypatch.setenv("MAX_RETRIES_PER_MODEL", "2")
        monkeypatch.setenv("RETRY_DELAY_SECONDS", "0.25")
        monkeypatch.setenv("RECIPES_PER_REQUEST", "3")
        monkeypatch.setenv("PANTRY_STAPLES", "salt,  pepper ,")
        monkeypatch.setenv("TRANSLATE_INGREDIENTS", "no")
        monkeypatch.setenv("PEXELS_API_KEY", "pexels-key")
        monkeypatch.setenv("RECIPE_SIGNING_SECRET", "s3cret")

        config = Config()

        assert config.AI_MODELS == ["model-a", "model-b"]
        assert config.MAX_RETRIES_PER_MODEL == 2
        assert config.RETRY_DELAY_SECONDS == 0.25
        assert config.RECIPES_PER_REQUEST == 3
        assert config.PANTRY_STAPLES == ["salt", "pepper"]
        assert config.TRANSLATE_INGREDIENTS is False
        assert config.PEXELS_API_KEY == "pexels-key"
        assert config.RECIPE_SIGNING_SECRET == "s3cret"

    def test_config_converts_numeric_types(self, monkeypatch):
        """Test that Config properly converts numeric environment variables."""
        monkeypatch.setenv("MAX_RETRIES_PER_MODEL", "7")
        monkeypatch.setenv("RETRY_DELAY_SECONDS", "2")
        monkeypatch.setenv("PORT", "9000")

        config = Config()

        assert isinstance(config.MAX_RETRIES_PER_MODEL, int)
        assert isinstance(config.RETRY_DELAY_SECONDS, float)
        assert isinstance(config.PORT, int)

    @pytest.mark.parametrize("raw,expected", [("true", True), ("1", True), ("YES", True), ("false", False), ("0", False)])
    def test_boolean_parsing(self, monkeypatch, raw, expected):
        """Test that boolean flags accept the usual spellings."""
        monkeypatch.setenv("TRANSLATE_INGREDIENTS", raw)
        assert Config().TRANSLATE_INGREDIENTS is expected


class TestConfigValidation:
    """Test Config validation logic."""

    def test_validate_raises_error_for_missing_gemini_key(self, monkeypatch, required_keys):
        """Test that validate() raises ValueError if GEMINI_API_KEY missing."""
        monkeypatch.setenv("GEMINI_API_KEY", "")

        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            Config().validate()

    def test_validate_raises_error_for_missing_signing_secret(self, monkeypatch, required_keys):
        """Test that validate() raises ValueError if RECIPE_SIGNING_SECRET missing."""
        monkeypatch.setenv("RECIPE_SIGNING_SECRET", "")

        with pytest.raises(ValueError, match="RECIPE_SIGNING_SECRET"):
            Config().validate()

    def test_validate_allows_missing_pexels_key(self, monkeypatch, required_keys):
        """Test that the photo API key is optional."""
        monkeypatch.setenv("PEXELS_API_KEY", "")
        Config().validate()  # Should not raise

    def test_validate_rejects_empty_model_list(self, monkeypatch, required_keys):
        monkeypatch.setenv("AI_MODELS", " , ")

        with pytest.raises(ValueError, match="AI_MODELS"):
            Config().validate()

    @pytest.mark.parametrize(
        "name,value",
        [
            ("MAX_RETRIES_PER_MODEL", "0"),
            ("RETRY_DELAY_SECONDS", "-1"),
            ("RECIPES_PER_REQUEST", "0"),
            ("TEMPERATURE", "1.5"),
            ("MAX_OUTPUT_TOKENS", "100"),
            ("IMAGE_SEARCH_TIMEOUT_SECONDS", "0"),
        ],
    )
    def test_validate_rejects_out_of_range_values(self, monkeypatch, required_keys, name, value):
        """Test that invalid policy values raise ValueError naming the setting."""
        monkeypatch.setenv(name, value)

        with pytest.raises(ValueError, match=name):
            Config().validate()

    def test_zero_retry_delay_is_valid(self, monkeypatch, required_keys):
        """Test that a zero delay (used by tests) passes validation."""
        monkeypatch.setenv("RETRY_DELAY_SECONDS", "0")
        Config().validate()  # Should not raise


class TestConfigEnvironmentOverride:
    """Test that environment variables override other sources."""

    def test_system_env_overrides_defaults(self, monkeypatch, required_keys):
        """Test that system env vars take precedence over defaults."""
        monkeypatch.setenv("PORT", "5555")

        config = Config()
        assert config.PORT == 5555  # Not default 7777
