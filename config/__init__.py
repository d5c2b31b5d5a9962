"""
Configuration Module for the GST Invoice Generator.

Settings come from ``config/settings.yaml`` (or the file named by the
GST_INVOICE_CONFIG environment variable). The sections the generator
depends on (company, invoice, rendering, storage) are filled from
built-in defaults where the file leaves them out, and their enumerated
values are checked when the file is loaded.
"""

import copy
import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

# Built-in values for the sections every run needs
SECTION_DEFAULTS: Dict[str, Dict[str, Any]] = {
    'company': {
        'name': 'VMP Villa Home Stay',
        'address': 'A-73, KPS Town, Baroli Ahir, Shamsabad Road, Agra, UP. 283125',
        'phone': '9258555345',
        'email': 'support@vmpvilla.in',
        'gstin': '09CAFPB2385C1Z1',
        'state': 'Uttar Pradesh',
        'state_code': '09',
    },
    'invoice': {
        'number_prefix': 'VMP',
        'default_hsn_code': '996311',
        'default_gst_rate': 5,
        'default_payment_method': 'Cash',
    },
    'rendering': {
        'mode': 'programmatic',
        'margin_mm': 10,
        'capture': {'scale': 2, 'background': '#ffffff', 'dpi': 144},
        'document': {
            'title': 'Tax Invoice',
            'author': 'VMP Villa Home Stay',
            'signature_label': 'Company seal and Sign',
        },
    },
    'storage': {
        'backend': 'memory',
        'base_url': 'https://blob.vercel-storage.com',
        'token_env': 'BLOB_READ_WRITE_TOKEN',
        'api_version': '7',
        'access': 'public',
    },
}

# Dotted key -> allowed values
CHOICES = {
    'rendering.mode': ('programmatic', 'visual'),
    'storage.backend': ('memory', 'http'),
    'storage.access': ('public', 'private'),
    'invoice.default_payment_method': ('Cash', 'Online'),
}


def _merge(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively overlay ``overrides`` onto a copy of ``defaults``."""
    merged = copy.deepcopy(defaults)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigurationManager:
    """
    Centralized configuration management for the invoice generator.

    Attributes:
        config_path (Path): Path to the configuration file.

    Example:
        >>> config = ConfigurationManager()
        >>> home_state = config.get("company.state")
        >>> prefix = config.get("invoice.number_prefix")
    """

    _instance: Optional['ConfigurationManager'] = None

    def __new__(cls, config_path: Optional[str] = None) -> 'ConfigurationManager':
        """Singleton: one configuration per process until reset()."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[str] = None) -> None:
        """
        Initialize the configuration manager.

        Args:
            config_path: Optional path to configuration file.
                        Defaults to config/settings.yaml, or the file named
                        by the GST_INVOICE_CONFIG environment variable.
        """
        if self._initialized:
            return

        config_path = config_path or os.environ.get("GST_INVOICE_CONFIG")
        if config_path is None:
            self.config_path = Path(__file__).parent / "settings.yaml"
        else:
            self.config_path = Path(config_path)

        self._config: Dict[str, Any] = {}
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """
        Load, default and check the configuration file.

        Raises:
            FileNotFoundError: If configuration file doesn't exist.
            yaml.YAMLError: If configuration file is invalid YAML.
            ValueError: If a section is not a mapping or an enumerated
                        setting has an unsupported value.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}"
            )

        with open(self.config_path, 'r', encoding='utf-8') as f:
            loaded = yaml.safe_load(f) or {}

        if not isinstance(loaded, dict):
            raise ValueError(f"{self.config_path}: top level must be a mapping")

        for section in SECTION_DEFAULTS:
            if section in loaded and not isinstance(loaded[section], dict):
                raise ValueError(f"{self.config_path}: '{section}' must be a mapping")

        self._config = _merge(SECTION_DEFAULTS, loaded)
        self._validate()
        self._resolve_paths()

    def _validate(self) -> None:
        for key, allowed in CHOICES.items():
            value = self.get(key)
            if value not in allowed:
                raise ValueError(
                    f"{self.config_path}: {key} must be one of {allowed}, got {value!r}"
                )

        if not str(self.get('invoice.number_prefix') or '').strip():
            raise ValueError(f"{self.config_path}: invoice.number_prefix must not be empty")

    def _resolve_paths(self) -> None:
        """Resolve relative ``paths.*`` entries against the project root."""
        project_root = Path(__file__).parent.parent

        for key, value in (self._config.get('paths') or {}).items():
            if value and not Path(value).is_absolute():
                self._config['paths'][key] = str(project_root / value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value using dot notation.

        Example:
            >>> config.get("invoice.number_prefix")
            "VMP"
            >>> config.get("nonexistent.key", "default_value")
            "default_value"
        """
        value = self._config

        try:
            for k in key.split('.'):
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    @classmethod
    def reset(cls) -> None:
        """Drop the singleton so the next access reloads (used by tests)."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for ``ConfigurationManager().get(key, default)``."""
    return ConfigurationManager().get(key, default)


__all__ = ['ConfigurationManager', 'get_config', 'SECTION_DEFAULTS']
