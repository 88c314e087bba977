"""
================================================================================
Configuration Loader
================================================================================

YAML-based run configuration with environment variable override support.

Features:
    - Hierarchical YAML configuration loading (config/config.yaml)
    - Optional environment overlay (config/<ENVIRONMENT>.yaml)
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Dot notation path access
    - Typed views for the UI layer (UISettings, BrowserProfile)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


# Default configuration file paths
CONFIG_DIR = Path(__file__).parent.parent.parent.parent / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"

DEFAULT_BASE_URL = "https://www.carnival.com/"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_TEST_TIMEOUT_MS = 60000


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


@dataclass(frozen=True)
class BrowserProfile:
    """
    One run project: a browser engine plus optional device emulation.

    Attributes:
        name: Project name (e.g. "chrome-desktop")
        browser_type: Playwright engine - 'chromium', 'firefox', 'webkit'
        device: Playwright device descriptor name (e.g. "Pixel 5")
        viewport: Viewport override applied on top of the device descriptor
    """
    name: str
    browser_type: str = "chromium"
    device: Optional[str] = None
    viewport: Optional[Dict[str, int]] = None


@dataclass(frozen=True)
class UISettings:
    """Typed view over the `ui` and `tracing` configuration sections."""
    base_url: str = DEFAULT_BASE_URL
    default_timeout: int = DEFAULT_TIMEOUT_MS
    test_timeout: int = DEFAULT_TEST_TIMEOUT_MS
    headless: bool = True
    ignore_https_errors: bool = True
    project: str = "chrome-desktop"
    trace_enabled: bool = True
    trace_keep_on_pass: bool = False
    results_dir: str = "test-results"


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL)
        2. Environment overlay file (config/<ENVIRONMENT>.yaml)
        3. YAML configuration file
        4. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.base_url", "https://www.carnival.com/")
        'https://www.carnival.com/'

        >>> config.get("ui.default_timeout", 30000)
        30000

    Environment Variable Mapping:
        - ui.base_url -> UI_BASE_URL
        - ui.project -> UI_PROJECT
        - tracing.enabled -> TRACING_ENABLED
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """
        Singleton pattern - return existing instance if available.

        Configuration is loaded once per worker process.
        """
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file plus optional environment overlay."""
        self._config = self._read_yaml(self._config_path, required=False)

        env = os.getenv("ENVIRONMENT")
        if env:
            overlay_path = self._config_path.parent / f"{env}.yaml"
            if overlay_path.exists():
                self._config = _deep_merge(self._config, self._read_yaml(overlay_path))
                logger.debug(f"Merged environment config: {overlay_path}")

    def _read_yaml(self, path: Path, required: bool = True) -> Dict[str, Any]:
        if not path.exists():
            if required:
                raise ConfigurationError(f"Configuration file not found: {path}")
            logger.warning(
                f"Configuration file not found: {path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {path}"
            )
        logger.debug(f"Loaded configuration from: {path}")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "ui.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        # Check environment variable first
        env_key = key.upper().replace(".", "_").replace("-", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        # Navigate YAML config by dot notation
        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def get_section(self, section: str) -> Dict[str, Any]:
        """
        Get entire configuration section.

        Args:
            section: Section name (e.g., "ui", "tracing")

        Returns:
            Section dictionary or empty dict if not found
        """
        return self._config.get(section, {}) or {}

    def ui_settings(self) -> UISettings:
        """Build the typed UI settings view (env overrides applied)."""
        return UISettings(
            base_url=self.get("ui.base_url", DEFAULT_BASE_URL),
            default_timeout=self.get("ui.default_timeout", DEFAULT_TIMEOUT_MS),
            test_timeout=self.get("ui.test_timeout", DEFAULT_TEST_TIMEOUT_MS),
            headless=self.get("ui.headless", True),
            ignore_https_errors=self.get("ui.ignore_https_errors", True),
            project=self.get("ui.project", "chrome-desktop"),
            trace_enabled=self.get("tracing.enabled", True),
            trace_keep_on_pass=self.get("tracing.keep_on_pass", False),
            results_dir=self.get("tracing.results_dir", "test-results"),
        )

    def browser_profile(self, name: Optional[str] = None) -> BrowserProfile:
        """
        Resolve a browser profile from `ui.projects`.

        Args:
            name: Project name; defaults to `ui.project`

        Raises:
            ConfigurationError: When the project is not configured
        """
        name = name or self.get("ui.project", "chrome-desktop")
        projects = self.get_section("ui").get("projects") or {}
        if name not in projects:
            raise ConfigurationError(
                f"Unknown browser project '{name}'. "
                f"Configured: {', '.join(sorted(projects)) or 'none'}"
            )

        raw = projects[name] or {}
        return BrowserProfile(
            name=name,
            browser_type=raw.get("browser_type", "chromium"),
            device=raw.get("device"),
            viewport=raw.get("viewport"),
        )

    def reload(self) -> None:
        """
        Reload configuration from file.

        Useful when configuration file has been updated during runtime.
        """
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Deep merges two dictionaries, with override taking precedence.
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


__all__ = [
    "BrowserProfile",
    "ConfigLoader",
    "ConfigurationError",
    "UISettings",
]
