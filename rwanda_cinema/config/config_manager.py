"""Configuration manager for loading and validating settings."""

import copy
import os
import yaml
import logging
from pathlib import Path
from typing import Dict, Any, Optional, List

from ..models.config import Config


class ConfigManager:
    """Manages service configuration from a YAML file and environment variables."""

    # Environment variable -> (config path, type)
    ENV_MAPPINGS = {
        'GITHUB_TOKEN': (['github', 'token'], str),
        'GITHUB_REPO': (['github', 'repository'], str),
        'GITHUB_API_URL': (['github', 'api_url'], str),
        'TRANSLATED_PATH': (['github', 'translated_path'], str),
        'SITEMAP_REPO': (['sitemap', 'repository'], str),
        'SITEMAP_CONTENT_ROOT': (['sitemap', 'content_root'], str),
        'MAX_CONCURRENT_FETCHES': (['network', 'max_concurrent_fetches'], int),
        'HTTP_TIMEOUT': (['network', 'timeout'], int),
        'HTTP_MAX_RETRIES': (['network', 'max_retries'], int),
        'LOG_LEVEL': (['logging', 'level'], str),
        'LOG_JSON': (['logging', 'json'], bool),
        'LOG_TO_FILE': (['logging', 'file'], bool),
        'SERVER_HOST': (['server', 'host'], str),
        'SERVER_PORT': (['server', 'port'], int),
        'PUBLIC_BASE_URL': (['server', 'public_base_url'], str),
    }

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_file: Path to the configuration file. If None, uses default locations.
        """
        self.logger = logging.getLogger(__name__)
        self.config_file = str(config_file) if config_file else self._find_config_file()
        self._config_data: Optional[Dict[str, Any]] = None
        self._config: Optional[Config] = None

    def _find_config_file(self) -> str:
        """Find the configuration file in default locations."""
        possible_paths = [
            os.getenv('CONFIG_FILE'),
            'config/config.yaml',
            'config/config.yml',
            os.path.expanduser('~/.rwanda-cinema/config.yaml')
        ]

        for path in possible_paths:
            if path and Path(path).exists():
                self.logger.info(f"Found config file: {path}")
                return path

        # Return default path even if it doesn't exist
        return 'config/config.yaml'

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from file and environment variables.

        A missing or unreadable file is logged and replaced by the defaults.

        Returns:
            Dictionary containing all configuration data
        """
        if self._config_data is not None:
            return self._config_data

        config_path = Path(self.config_file)

        if not config_path.exists():
            self.logger.warning(f"Config file not found: {config_path}, using defaults")
            self._config_data = self._get_default_config()
        else:
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    loaded = yaml.safe_load(f) or {}
                if not isinstance(loaded, dict):
                    self.logger.error(f"Config file {config_path} does not contain a mapping")
                    loaded = self._get_default_config()
                self._config_data = loaded
                self.logger.info(f"Loaded config from: {config_path}")
            except yaml.YAMLError as e:
                self.logger.error(f"Invalid YAML in config file: {e}")
                self._config_data = self._get_default_config()
            except OSError as e:
                self.logger.error(f"Error reading config file: {e}")
                self._config_data = self._get_default_config()

        # Override with environment variables
        self._apply_env_overrides()

        self._merge_defaults(self._config_data, self._get_default_config())

        return self._config_data

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration values."""
        return {
            'github': {
                'repository': 'burnac321/Inyarwanda-Films',
                'token': '',
                'api_url': 'https://api.github.com',
                'user_agent': 'Rwanda-Cinema',
                'translated_path': 'content/translated',
            },
            'sitemap': {
                'repository': 'burnac321/Inyarwanda-Films',
                'user_agent': 'Inyarwanda-Films',
                'content_root': 'content/movies',
                'categories': ['comedy', 'drama', 'music', 'action', 'documentary'],
                'max_urls_per_sitemap': 1000,
            },
            'network': {
                'timeout': 30,
                'max_retries': 2,
                'max_concurrent_fetches': 5,
            },
            'listing': {
                'latest_per_type': 8,
                'content_types': ['MOVIE', 'TV-SERIES'],
            },
            'server': {
                'host': '0.0.0.0',
                'port': 8788,
                'public_base_url': '',
            },
            'logging': {
                'level': 'INFO',
                'json': False,
                'file': False,
            },
        }

    def _merge_defaults(self, target: Dict[str, Any], defaults: Dict[str, Any]) -> None:
        """Recursively merge default configuration values without overwriting user-defined settings."""
        for key, default_value in defaults.items():
            if key not in target:
                target[key] = copy.deepcopy(default_value)
            else:
                current_value = target[key]
                if isinstance(default_value, dict) and isinstance(current_value, dict):
                    self._merge_defaults(current_value, default_value)

    def _apply_env_overrides(self):
        """Apply environment variable overrides to configuration."""
        for env_var, (config_path, value_type) in self.ENV_MAPPINGS.items():
            value = os.getenv(env_var)
            if value is None:
                continue

            # Convert string values to appropriate types
            if value_type is int:
                try:
                    value = int(value)
                except ValueError:
                    self.logger.warning(f"Invalid integer value for {env_var}: {value}")
                    continue
            elif value_type is bool:
                value = value.lower() in ('true', '1', 'yes', 'on')

            self._set_nested_value(self._config_data, config_path, value)
            # Tokens stay out of the logs
            shown = '***' if env_var == 'GITHUB_TOKEN' else value
            self.logger.debug(f"Applied env override: {env_var} = {shown}")

    def _set_nested_value(self, data: Dict[str, Any], path: List[str], value: Any):
        """Set a nested value in the configuration dictionary."""
        current = data
        for key in path[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[path[-1]] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-separated key.

        Args:
            key: Dot-separated key (e.g., 'github.repository')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        if self._config_data is None:
            self.load_config()

        current = self._config_data

        try:
            for k in key.split('.'):
                current = current[k]
            return current
        except (KeyError, TypeError):
            return default

    def get_config_data(self) -> Dict[str, Any]:
        """Raw configuration data as a dictionary."""
        if self._config_data is None:
            self.load_config()
        return self._config_data or {}

    def get_config(self) -> Config:
        """
        Get the configuration as a Config object.

        Returns:
            Config object with all settings

        Raises:
            ValueError: If configuration is invalid
        """
        if self._config is not None:
            return self._config

        if self._config_data is None:
            self.load_config()

        try:
            config_dict = {
                'github_repository': self.get('github.repository'),
                'github_token': self.get('github.token') or None,
                'github_api_url': self.get('github.api_url'),
                'github_user_agent': self.get('github.user_agent'),
                'translated_path': self.get('github.translated_path'),
                'sitemap_repository': self.get('sitemap.repository'),
                'sitemap_user_agent': self.get('sitemap.user_agent'),
                'sitemap_content_root': self.get('sitemap.content_root'),
                'sitemap_categories': self.get('sitemap.categories'),
                'max_urls_per_sitemap': self.get('sitemap.max_urls_per_sitemap'),
                'http_timeout': self.get('network.timeout'),
                'http_max_retries': self.get('network.max_retries'),
                'max_concurrent_fetches': self.get('network.max_concurrent_fetches'),
                'latest_per_type': self.get('listing.latest_per_type'),
                'content_types': self.get('listing.content_types'),
                'server_host': self.get('server.host'),
                'server_port': self.get('server.port'),
                'public_base_url': self.get('server.public_base_url') or None,
                'log_level': str(self.get('logging.level', 'INFO')).upper(),
                'log_json': bool(self.get('logging.json', False)),
                'log_to_file': bool(self.get('logging.file', False)),
            }

            # Remove None values
            config_dict = {k: v for k, v in config_dict.items() if v is not None}

            self._config = Config(**config_dict)
            return self._config

        except (TypeError, ValueError) as e:
            self.logger.error(f"Error creating Config object: {e}")
            raise ValueError(f"Invalid configuration: {e}")

    def validate_config(self) -> List[str]:
        """
        Validate the configuration and return any errors.

        Returns:
            List of validation error messages
        """
        errors = []

        try:
            config = self.get_config()
        except ValueError as e:
            return [f"Configuration validation failed: {e}"]

        if not config.github_token:
            errors.append("GitHub token is not set; requests will be rate limited")

        for category in config.sitemap_categories:
            if not category or '/' in category:
                errors.append(f"Invalid sitemap category: {category!r}")

        if config.public_base_url and not config.public_base_url.startswith(('http://', 'https://')):
            errors.append("public_base_url must start with http:// or https://")

        return errors

    def reload_config(self):
        """Reload configuration from file."""
        self._config_data = None
        self._config = None
        self.load_config()
