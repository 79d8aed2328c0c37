"""
ConfigLoader module for loading and validating Shopify adapter configuration files
"""

import os
import tomllib
import yaml
from pathlib import Path
from dataclasses import dataclass, field
from typing import Dict, Any, Optional

DEFAULT_API_VERSION = "2024-10"
DEFAULT_RATE_LIMIT_DELAY = 0.5
DEFAULT_TIMEOUT = 30.0


class ConfigurationError(Exception):
    """Raised when configuration is invalid or incomplete"""
    pass


@dataclass(frozen=True)
class ShopifyConfig:
    """Connection and runtime settings for one task or trigger invocation"""
    store_domain: str
    access_token: str = field(repr=False)
    api_version: str = DEFAULT_API_VERSION
    rate_limit_delay: float = DEFAULT_RATE_LIMIT_DELAY
    timeout: float = DEFAULT_TIMEOUT
    storage_directory: str = "data/storage"
    state_db_path: str = "data/databases/shopify_trigger_state.db"
    trigger: Dict[str, Any] = field(default_factory=dict)


def resolve(value: Any, name: str, required: bool = True, default: Any = None) -> Any:
    """
    Resolve a configuration value to its concrete form

    Strings are stripped and blank strings count as absent.

    Args:
        value: Raw value from configuration or a caller
        name: Setting name used in error messages
        required: Whether an absent value is an error
        default: Value returned when absent and not required

    Returns:
        The resolved value, or the default

    Raises:
        ConfigurationError: If the value is required and absent
    """
    if isinstance(value, str):
        value = value.strip()
        if not value:
            value = None

    if value is None:
        if required:
            raise ConfigurationError(f"Required setting '{name}' is missing or blank")
        return default

    return value


class ConfigLoader:
    """Loads and validates TOML or YAML configuration files"""

    # Required configuration sections and their mandatory keys
    REQUIRED_SECTIONS = {
        'store': ['domain'],
        'authentication': ['access_token_env'],
    }

    @staticmethod
    def load_config(config_path: Path) -> ShopifyConfig:
        """
        Load adapter configuration from a TOML or YAML file

        Args:
            config_path: Path to the configuration file

        Returns:
            ShopifyConfig with the access token resolved from the environment

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the file cannot be parsed or required items are missing
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        if config_path.suffix.lower() == '.toml':
            config_data = ConfigLoader._load_toml(config_path)
        elif config_path.suffix.lower() in ('.yml', '.yaml'):
            config_data = ConfigLoader._load_yaml(config_path)
        else:
            raise ConfigurationError(f"Unsupported configuration format: {config_path.suffix}")

        return ConfigLoader.from_mapping(config_data)

    @staticmethod
    def from_mapping(config_data: Dict[str, Any]) -> ShopifyConfig:
        """
        Build a ShopifyConfig from already parsed configuration data

        Args:
            config_data: Parsed configuration sections

        Returns:
            ShopifyConfig object

        Raises:
            ConfigurationError: If required configuration is missing
        """
        ConfigLoader._validate_required_sections(config_data)

        store = config_data['store']
        authentication = config_data['authentication']
        rate_limits = config_data.get('rate_limits') or {}
        http = config_data.get('http') or {}
        storage = config_data.get('storage') or {}
        state = config_data.get('state') or {}

        access_token = ConfigLoader.get_environment_value(authentication['access_token_env'])

        delay_ms = rate_limits.get('delay_ms', DEFAULT_RATE_LIMIT_DELAY * 1000)

        return ShopifyConfig(
            store_domain=resolve(store['domain'], 'store.domain'),
            access_token=resolve(access_token, 'access_token'),
            api_version=resolve(store.get('api_version'), 'store.api_version',
                                required=False, default=DEFAULT_API_VERSION),
            rate_limit_delay=float(delay_ms) / 1000.0,
            timeout=float(http.get('timeout_seconds', DEFAULT_TIMEOUT)),
            storage_directory=storage.get('directory', 'data/storage'),
            state_db_path=state.get('database', 'data/databases/shopify_trigger_state.db'),
            trigger=dict(config_data.get('trigger') or {}),
        )

    @staticmethod
    def _load_toml(config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path, 'rb') as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML syntax in {config_path}: {e}")

    @staticmethod
    def _load_yaml(config_path: Path) -> Dict[str, Any]:
        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {config_path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Configuration in {config_path} must be a mapping")
        return config_data

    @staticmethod
    def _validate_required_sections(config_data: Dict[str, Any]) -> None:
        """
        Validate that all required configuration sections and keys are present

        Args:
            config_data: Parsed configuration data

        Raises:
            ConfigurationError: If any required section or key is missing
        """
        missing_items = []

        for section_name, required_keys in ConfigLoader.REQUIRED_SECTIONS.items():
            if section_name not in config_data:
                missing_items.append(f"Section [{section_name}]")
            else:
                section_data = config_data[section_name]
                if not isinstance(section_data, dict):
                    missing_items.append(f"Section [{section_name}] must be a table of settings")
                    continue
                for key in required_keys:
                    if key not in section_data:
                        missing_items.append(f"Key '{key}' in section [{section_name}]")

        if missing_items:
            raise ConfigurationError(
                f"Missing required configuration items: {', '.join(missing_items)}"
            )

    @staticmethod
    def get_environment_value(env_var_name: str) -> str:
        """
        Get environment variable value with proper error handling

        Args:
            env_var_name: Name of the environment variable

        Returns:
            Value of the environment variable

        Raises:
            ConfigurationError: If environment variable is not set or blank
        """
        value = os.getenv(env_var_name)
        if value is None or not value.strip():
            raise ConfigurationError(f"Environment variable '{env_var_name}' is not set")
        return value


def trigger_setting(config: ShopifyConfig, key: str, default: Optional[Any] = None) -> Any:
    """Read an optional poller setting from the [trigger] section"""
    return resolve(config.trigger.get(key), f"trigger.{key}", required=False, default=default)
