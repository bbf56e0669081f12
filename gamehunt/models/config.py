"""Configuration data models."""

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.rawg.io/api/"


@dataclass(frozen=True)
class AppConfig:
    """Application configuration settings."""
    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 50.0  # Connect and read timeout in seconds
    connection_retries: int = 1  # Transport-level retries on connection failure
    log_level: str = "INFO"
