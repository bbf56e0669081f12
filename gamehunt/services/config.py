"""Configuration service for managing application settings."""

import json
from pathlib import Path

import structlog

from ..models import AppConfig
from ..models.config import DEFAULT_BASE_URL

log = structlog.stdlib.get_logger()

DEFAULT_API_KEY = ""
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ValidationResult:
    """Result of configuration validation."""

    def __init__(self, is_valid: bool, errors: list[str] | None = None) -> None:
        self.is_valid: bool = is_valid
        self.errors: list[str] = errors or []


class ConfigurationService:
    """Service for managing application configuration."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path: Path = config_path or Path.home() / ".config" / "gamehunt" / "config.json"
        log.info("Configuration service initialized", config_path=str(self.config_path))

    def load_config(self) -> AppConfig:
        """Load configuration from file or return default configuration."""
        if not self.config_path.exists():
            log.info("Configuration file not found, using defaults")
            return self._get_default_config()

        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                data: dict[str, str | int | float | None] = json.load(f)

            config = self._dict_to_config(data)
            validation_result = self.validate_config(config)

            if not validation_result.is_valid:
                log.warning("Invalid configuration loaded, using defaults", errors=validation_result.errors)
                return self._get_default_config()

            log.info("Configuration loaded successfully", has_api_key=bool(config.api_key))
            return config

        except (json.JSONDecodeError, AttributeError, KeyError, TypeError, ValueError) as e:
            log.error("Failed to load configuration, using defaults", error=str(e))
            return self._get_default_config()

    def save_config(self, config: AppConfig) -> None:
        """Save configuration to file."""
        validation_result = self.validate_config(config)
        if not validation_result.is_valid:
            raise ValueError(f"Invalid configuration: {', '.join(validation_result.errors)}")

        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            data = self._config_to_dict(config)
            with open(self.config_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            log.info("Configuration saved successfully")

        except OSError as e:
            log.error("Failed to save configuration", error=str(e))
            raise

    def validate_config(self, config: AppConfig) -> ValidationResult:
        """Validate configuration settings."""
        errors = []

        if not isinstance(config.api_key, str):
            errors.append("api_key must be a string")
        elif config.api_key != config.api_key.strip():
            errors.append("api_key must not contain surrounding whitespace")

        if not isinstance(config.base_url, str) or not config.base_url.startswith(("http://", "https://")):
            errors.append("base_url must be an http(s) URL")
        elif not config.base_url.endswith("/"):
            errors.append("base_url must end with '/'")

        if not isinstance(config.timeout, (int, float)) or config.timeout <= 0:
            errors.append("timeout must be a positive number")
        elif config.timeout > 300:
            errors.append("timeout should not exceed 300 seconds")

        if not isinstance(config.connection_retries, int) or config.connection_retries < 0:
            errors.append("connection_retries must be a non-negative integer")
        elif config.connection_retries > 5:
            errors.append("connection_retries should not exceed 5")

        if config.log_level not in VALID_LOG_LEVELS:
            errors.append(f"log_level must be one of: {', '.join(VALID_LOG_LEVELS)}")

        return ValidationResult(len(errors) == 0, errors)

    def _get_default_config(self) -> AppConfig:
        """Get default configuration."""
        return AppConfig(
            api_key=DEFAULT_API_KEY,
            base_url=DEFAULT_BASE_URL,
            timeout=50.0,
            connection_retries=1,
            log_level="INFO",
        )

    def _config_to_dict(self, config: AppConfig) -> dict[str, str | int | float | None]:
        """Convert AppConfig to dictionary for JSON serialization."""
        return {
            "api_key": config.api_key,
            "base_url": config.base_url,
            "timeout": config.timeout,
            "connection_retries": config.connection_retries,
            "log_level": config.log_level,
        }

    def _dict_to_config(self, data: dict[str, str | int | float | None]) -> AppConfig:
        """Convert dictionary to AppConfig."""
        timeout_raw = data.get("timeout", 50.0)
        retries_raw = data.get("connection_retries", 1)
        log_level_raw = data.get("log_level", "INFO")
        base_url_raw = data.get("base_url", DEFAULT_BASE_URL)

        return AppConfig(
            api_key=str(data["api_key"]) if data.get("api_key") is not None else DEFAULT_API_KEY,
            base_url=str(base_url_raw) if isinstance(base_url_raw, str) else DEFAULT_BASE_URL,
            timeout=float(timeout_raw) if isinstance(timeout_raw, (int, float)) else 50.0,
            connection_retries=int(retries_raw) if isinstance(retries_raw, int) else 1,
            log_level=str(log_level_raw).upper() if isinstance(log_level_raw, str) else "INFO",
        )
