"""Configuration management for the adsreport package.

This module provides a unified configuration system with clear precedence:
explicit overrides > Environment variables > YAML file > Defaults

Configuration objects are plain dataclasses; clients are built from them
explicitly, so no module holds a process-wide client.
"""

import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional, List
from loguru import logger

from adsreport.core.exceptions import ConfigurationError
from adsreport.core.constants import (
    DEFAULT_PAGE_SIZE,
    REQUEST_TIMEOUT_SECONDS,
    SHEETS_SCOPES,
    LOG_LEVEL_DEFAULT,
    ENV_CONFIG_FILE,
    ENV_FACEBOOK_API_VERSION,
    ENV_FACEBOOK_GRAPH_URL,
    ENV_FACEBOOK_PAGE_SIZE,
    ENV_FACEBOOK_TOKEN_IN_QUERY,
    ENV_REQUEST_TIMEOUT,
    ENV_GOOGLE_SERVICE_ACCOUNT_EMAIL,
    ENV_GOOGLE_PRIVATE_KEY,
    ENV_GOOGLE_SHEETS_ID,
    ENV_LOG_LEVEL,
    ENV_LOG_FILE,
    ENV_CORS_ORIGINS,
)
from adsreport.platforms.facebook.constants import API_VERSION, GRAPH_BASE_URL


@dataclass
class FacebookConfig:
    """Graph API connection settings."""

    api_version: str = API_VERSION
    graph_url: str = GRAPH_BASE_URL
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: int = REQUEST_TIMEOUT_SECONDS
    token_in_query: bool = False

    @property
    def base_url(self) -> str:
        """Versioned Graph root, e.g. https://graph.facebook.com/v18.0"""
        return f"{self.graph_url.rstrip('/')}/{self.api_version}"

    def __post_init__(self):
        if self.page_size <= 0:
            raise ConfigurationError(
                "Page size must be positive", details={"page_size": self.page_size}
            )
        if self.timeout <= 0:
            raise ConfigurationError(
                "Request timeout must be positive", details={"timeout": self.timeout}
            )


@dataclass
class GoogleSheetsConfig:
    """Service-account credentials and target spreadsheet."""

    service_account_email: Optional[str] = None
    private_key: Optional[str] = None
    spreadsheet_id: Optional[str] = None
    scopes: List[str] = field(default_factory=lambda: list(SHEETS_SCOPES))

    @property
    def is_configured(self) -> bool:
        return bool(self.service_account_email and self.private_key and self.spreadsheet_id)

    def require(self) -> "GoogleSheetsConfig":
        """Return self, or raise if any Sheets setting is missing.

        Raises:
            ConfigurationError: If a credential or the spreadsheet id is missing
        """
        missing = [
            env_var
            for env_var, value in (
                (ENV_GOOGLE_SERVICE_ACCOUNT_EMAIL, self.service_account_email),
                (ENV_GOOGLE_PRIVATE_KEY, self.private_key),
                (ENV_GOOGLE_SHEETS_ID, self.spreadsheet_id),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Google Sheets is not configured. Missing: {', '.join(missing)}"
            )
        return self


@dataclass
class AppConfig:
    """Application-wide configuration."""

    facebook: FacebookConfig = field(default_factory=FacebookConfig)
    sheets: GoogleSheetsConfig = field(default_factory=GoogleSheetsConfig)
    log_level: str = LOG_LEVEL_DEFAULT
    log_file: Optional[str] = None
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])


class ConfigurationManager:
    """Loads AppConfig from a YAML file and the environment.

    Configuration precedence (highest to lowest):
    1. Overrides passed to load_config()
    2. Environment variables
    3. YAML configuration file
    4. Default values
    """

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize the configuration manager.

        Args:
            config_file: Optional YAML file. Defaults to $REPORT_CONFIG_FILE.
        """
        if config_file is None and os.getenv(ENV_CONFIG_FILE):
            config_file = Path(os.environ[ENV_CONFIG_FILE])
        self.config_file = config_file
        self._app_config: Optional[AppConfig] = None

    def load_config(self, overrides: Optional[Dict[str, Any]] = None) -> AppConfig:
        """Load application configuration.

        Args:
            overrides: Flat mapping of setting name to value, applied last.
                       Keys: api_version, graph_url, page_size, timeout,
                       token_in_query, service_account_email, private_key,
                       spreadsheet_id, log_level, log_file.

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If the YAML file or a value is invalid
        """
        settings = self._load_yaml()
        settings.update(self._load_env())
        if overrides:
            settings.update({k: v for k, v in overrides.items() if v is not None})

        facebook = FacebookConfig(
            api_version=settings.get("api_version", API_VERSION),
            graph_url=settings.get("graph_url", GRAPH_BASE_URL),
            page_size=self._as_int("page_size", settings.get("page_size", DEFAULT_PAGE_SIZE)),
            timeout=self._as_int("timeout", settings.get("timeout", REQUEST_TIMEOUT_SECONDS)),
            token_in_query=self._as_bool(settings.get("token_in_query", False)),
        )

        private_key = settings.get("private_key")
        if private_key:
            # Keys pasted into .env files carry literal "\n" sequences
            private_key = private_key.replace("\\n", "\n")

        sheets = GoogleSheetsConfig(
            service_account_email=settings.get("service_account_email"),
            private_key=private_key,
            spreadsheet_id=settings.get("spreadsheet_id"),
        )

        cors = settings.get("cors_origins")
        if isinstance(cors, str):
            cors = [o.strip() for o in cors.split(",") if o.strip()]

        app_config = AppConfig(
            facebook=facebook,
            sheets=sheets,
            log_level=str(settings.get("log_level", LOG_LEVEL_DEFAULT)).upper(),
            log_file=settings.get("log_file"),
        )
        if cors:
            app_config.cors_origins = list(cors)

        if not sheets.is_configured:
            logger.warning("Google Sheets configuration incomplete, Sheets exports disabled")

        self._app_config = app_config
        return app_config

    def get_config(self) -> AppConfig:
        """Get the current application configuration.

        Raises:
            ConfigurationError: If configuration not loaded yet
        """
        if self._app_config is None:
            raise ConfigurationError(
                "Configuration not loaded. Call load_config() first."
            )
        return self._app_config

    def _load_yaml(self) -> Dict[str, Any]:
        """Read the optional YAML file into a flat settings dict.

        The file may group keys under ``facebook``, ``sheets`` and ``logging``.
        """
        if self.config_file is None:
            return {}

        path = Path(self.config_file)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Failed to parse YAML configuration: {path}",
                details={"error": str(e)},
            )

        settings: Dict[str, Any] = {}
        for section in ("facebook", "sheets", "logging", "api"):
            values = raw.get(section) or {}
            if not isinstance(values, dict):
                raise ConfigurationError(
                    f"Section '{section}' must be a mapping", details={"file": str(path)}
                )
            settings.update(values)

        logger.info(f"Loaded configuration from {path}")
        return settings

    def _load_env(self) -> Dict[str, Any]:
        mapping = {
            "api_version": ENV_FACEBOOK_API_VERSION,
            "graph_url": ENV_FACEBOOK_GRAPH_URL,
            "page_size": ENV_FACEBOOK_PAGE_SIZE,
            "token_in_query": ENV_FACEBOOK_TOKEN_IN_QUERY,
            "timeout": ENV_REQUEST_TIMEOUT,
            "service_account_email": ENV_GOOGLE_SERVICE_ACCOUNT_EMAIL,
            "private_key": ENV_GOOGLE_PRIVATE_KEY,
            "spreadsheet_id": ENV_GOOGLE_SHEETS_ID,
            "log_level": ENV_LOG_LEVEL,
            "log_file": ENV_LOG_FILE,
            "cors_origins": ENV_CORS_ORIGINS,
        }
        return {key: os.environ[env] for key, env in mapping.items() if os.getenv(env)}

    @staticmethod
    def _as_int(name: str, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"Invalid integer for {name}: {value}", details={"setting": name}
            )

    @staticmethod
    def _as_bool(value: Any) -> bool:
        if isinstance(value, bool):
            return value
        return str(value).lower() in ("true", "1", "yes", "on")
