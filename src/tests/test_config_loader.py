"""
Test suite for ConfigLoader component
Following TDD approach with AAA pattern and descriptive naming
"""

import pytest
import tempfile
import os
from pathlib import Path
from unittest.mock import patch
from shopify_adapter.config_loader import (
    ConfigLoader,
    ShopifyConfig,
    ConfigurationError,
    resolve,
    trigger_setting,
    DEFAULT_API_VERSION,
)


VALID_TOML = """
[store]
domain = "test-store.myshopify.com"
api_version = "2024-07"

[authentication]
access_token_env = "TEST_SHOPIFY_TOKEN"

[rate_limits]
delay_ms = 250

[http]
timeout_seconds = 15

[storage]
directory = "data/test_storage"

[trigger]
interval_minutes = 2
max_results = 25
"""

VALID_YAML = """
store:
  domain: test-store.myshopify.com
authentication:
  access_token_env: TEST_SHOPIFY_TOKEN
trigger:
  financial_status: paid
"""


def write_config(content: str, suffix: str) -> Path:
    with tempfile.NamedTemporaryFile(mode='w', suffix=suffix, delete=False) as f:
        f.write(content)
        return Path(f.name)


class TestConfigLoader:
    """Test suite for ConfigLoader TOML and YAML loading functionality"""

    def test_load_config_with_valid_toml_returns_shopify_config(self):
        """
        Test that loading a valid TOML file returns a fully populated ShopifyConfig
        """
        # Arrange
        config_path = write_config(VALID_TOML, '.toml')

        try:
            # Act
            with patch.dict(os.environ, {'TEST_SHOPIFY_TOKEN': 'shpat_test_123'}):
                config = ConfigLoader.load_config(config_path)

            # Assert
            assert isinstance(config, ShopifyConfig)
            assert config.store_domain == "test-store.myshopify.com"
            assert config.access_token == "shpat_test_123"
            assert config.api_version == "2024-07"
            assert config.rate_limit_delay == 0.25
            assert config.timeout == 15.0
            assert config.storage_directory == "data/test_storage"
            assert config.trigger == {'interval_minutes': 2, 'max_results': 25}
        finally:
            config_path.unlink()

    def test_load_config_with_valid_yaml_applies_defaults(self):
        """
        Test that a minimal YAML file loads with default version, delay and timeout
        """
        # Arrange
        config_path = write_config(VALID_YAML, '.yaml')

        try:
            # Act
            with patch.dict(os.environ, {'TEST_SHOPIFY_TOKEN': 'shpat_yaml'}):
                config = ConfigLoader.load_config(config_path)

            # Assert
            assert config.api_version == DEFAULT_API_VERSION
            assert config.rate_limit_delay == 0.5
            assert config.timeout == 30.0
            assert config.trigger['financial_status'] == 'paid'
        finally:
            config_path.unlink()

    def test_load_config_with_missing_file_raises_file_not_found_error(self):
        """
        Test that a missing configuration file raises FileNotFoundError
        """
        # Arrange
        config_path = Path("does/not/exist.toml")

        # Act & Assert
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            ConfigLoader.load_config(config_path)

    def test_load_config_with_unsupported_suffix_raises_configuration_error(self):
        """
        Test that a file that is neither TOML nor YAML is rejected
        """
        # Arrange
        config_path = write_config('{"store": {}}', '.json')

        try:
            # Act & Assert
            with pytest.raises(ConfigurationError, match="Unsupported configuration format"):
                ConfigLoader.load_config(config_path)
        finally:
            config_path.unlink()

    def test_load_config_with_invalid_toml_raises_configuration_error(self):
        """
        Test that malformed TOML raises ConfigurationError
        """
        # Arrange
        config_path = write_config("[store\ndomain = ", '.toml')

        try:
            # Act & Assert
            with pytest.raises(ConfigurationError, match="Invalid TOML syntax"):
                ConfigLoader.load_config(config_path)
        finally:
            config_path.unlink()

    def test_from_mapping_with_missing_sections_lists_every_missing_item(self):
        """
        Test that validation reports all missing sections and keys together
        """
        # Arrange
        config_data = {'store': {}}

        # Act & Assert
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.from_mapping(config_data)

        message = str(exc_info.value)
        assert "Key 'domain' in section [store]" in message
        assert "Section [authentication]" in message

    def test_load_config_with_empty_yaml_store_section_raises_configuration_error(self):
        """
        Test that a store section with no settings is reported as a configuration error
        """
        # Arrange
        config_path = write_config("store:\nauthentication:\n  access_token_env: TEST_SHOPIFY_TOKEN\n", '.yaml')

        try:
            # Act & Assert
            with patch.dict(os.environ, {'TEST_SHOPIFY_TOKEN': 'token'}):
                with pytest.raises(ConfigurationError, match=r"Section \[store\]"):
                    ConfigLoader.load_config(config_path)
        finally:
            config_path.unlink()

    def test_load_config_with_empty_optional_yaml_sections_applies_defaults(self):
        """
        Test that empty optional sections fall back to defaults instead of failing
        """
        # Arrange
        content = VALID_YAML.replace("trigger:\n  financial_status: paid\n", "") + "rate_limits:\nhttp:\nstorage:\nstate:\ntrigger:\n"
        config_path = write_config(content, '.yaml')

        try:
            # Act
            with patch.dict(os.environ, {'TEST_SHOPIFY_TOKEN': 'token'}):
                config = ConfigLoader.load_config(config_path)

            # Assert
            assert config.rate_limit_delay == 0.5
            assert config.timeout == 30.0
            assert config.storage_directory == "data/storage"
            assert config.trigger == {}
        finally:
            config_path.unlink()

    def test_from_mapping_with_unset_token_variable_raises_configuration_error(self):
        """
        Test that an unset access token environment variable is a configuration error
        """
        # Arrange
        config_data = {
            'store': {'domain': 'test-store.myshopify.com'},
            'authentication': {'access_token_env': 'UNSET_SHOPIFY_TOKEN_VAR'},
        }

        # Act & Assert
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError, match="UNSET_SHOPIFY_TOKEN_VAR"):
                ConfigLoader.from_mapping(config_data)

    def test_from_mapping_with_blank_domain_raises_configuration_error(self):
        """
        Test that a whitespace-only store domain counts as missing
        """
        # Arrange
        config_data = {
            'store': {'domain': '   '},
            'authentication': {'access_token_env': 'TEST_SHOPIFY_TOKEN'},
        }

        # Act & Assert
        with patch.dict(os.environ, {'TEST_SHOPIFY_TOKEN': 'token'}):
            with pytest.raises(ConfigurationError, match="store.domain"):
                ConfigLoader.from_mapping(config_data)

    def test_shopify_config_repr_does_not_expose_access_token(self):
        """
        Test that the access token never appears in the config's repr
        """
        # Arrange
        config = ShopifyConfig(store_domain="test-store.myshopify.com", access_token="shpat_secret")

        # Act
        text = repr(config)

        # Assert
        assert "shpat_secret" not in text


class TestResolve:
    """Test suite for configuration value resolution"""

    def test_resolve_strips_surrounding_whitespace(self):
        """
        Test that string values are stripped
        """
        # Act & Assert
        assert resolve("  value  ", "name") == "value"

    def test_resolve_with_blank_optional_value_returns_default(self):
        """
        Test that blank strings are treated as absent for optional settings
        """
        # Act & Assert
        assert resolve("   ", "name", required=False, default="fallback") == "fallback"
        assert resolve(None, "name", required=False) is None

    def test_resolve_with_missing_required_value_raises_configuration_error(self):
        """
        Test that absent required values raise ConfigurationError naming the setting
        """
        # Act & Assert
        with pytest.raises(ConfigurationError, match="'email'"):
            resolve("", "email")

    def test_resolve_keeps_non_string_values(self):
        """
        Test that numbers and booleans pass through untouched
        """
        # Act & Assert
        assert resolve(0, "count") == 0
        assert resolve(False, "flag") is False

    def test_trigger_setting_reads_optional_trigger_values(self):
        """
        Test that trigger settings fall back to the default when absent
        """
        # Arrange
        config = ShopifyConfig(store_domain="s", access_token="t", trigger={'max_results': 5})

        # Act & Assert
        assert trigger_setting(config, 'max_results', 10) == 5
        assert trigger_setting(config, 'lookback_minutes', 10) == 10
