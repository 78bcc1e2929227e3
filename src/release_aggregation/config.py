"""
Configuration management for Release Aggregation.

Uses Pydantic for validation and pydantic-settings for environment variable support.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Release feeds aggregated by the service. Not configurable.
FEED_URLS: tuple[str, ...] = (
    "https://github.com/secureedumailproject/secureedumail/releases.atom",
    "https://github.com/secureedumailproject/secureedurest/releases.atom",
    "https://github.com/secureedumailproject/secureeducrypt/releases.atom",
)


class FetcherConfig(BaseSettings):
    """Atom feed fetcher configuration."""

    model_config = SettingsConfigDict(env_prefix="FETCHER_")

    # HTTP settings; unset keeps the httpx client default
    timeout_seconds: Optional[int] = Field(default=None, ge=1, le=300, description="Request timeout")
    user_agent: str = Field(
        default="Release-Aggregation/0.1.0",
        description="User-Agent header"
    )

    # Follow redirects
    follow_redirects: bool = Field(default=True)
    max_redirects: int = Field(default=5, ge=0, le=20)


class ExtractorConfig(BaseSettings):
    """Entry extractor configuration."""

    model_config = SettingsConfigDict(env_prefix="EXTRACTOR_")

    wordwrap: int = Field(
        default=130,
        ge=20,
        le=1000,
        description="Column width used when rendering entry HTML as text"
    )


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        description="Log format"
    )

    # File logging
    file_enabled: bool = Field(default=False, description="Enable file logging")
    file_path: str = Field(default="logs/release_aggregation.log", description="Log file path")
    rotation: str = Field(default="50 MB", description="Log rotation size")
    retention: str = Field(default="14 days", description="Log retention period")

    # Console logging
    console_enabled: bool = Field(default=True, description="Enable console logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v


class WebConfig(BaseSettings):
    """Web server configuration."""

    model_config = SettingsConfigDict(env_prefix="WEB_")

    host: str = Field(default="localhost", description="Web server host")
    port: int = Field(default=3001, ge=1, le=65535, description="Web server port")
    debug: bool = Field(default=False, description="Debug mode")


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="RELEASES_",
        case_sensitive=False,
    )

    # Sub-configurations
    fetcher: FetcherConfig = Field(default_factory=FetcherConfig)
    extractor: ExtractorConfig = Field(default_factory=ExtractorConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    # Paths
    config_dir: str = Field(default="config", description="Configuration directory")

    def get_config_path(self, name: str) -> Path:
        """Get path to a configuration file."""
        return Path(self.config_dir) / name


# Global configuration instance
_config: Optional[Config] = None

_NESTED_CONFIGS = {
    "fetcher": FetcherConfig,
    "extractor": ExtractorConfig,
    "logging": LoggingConfig,
    "web": WebConfig,
}


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config_from_yaml(yaml_path: str) -> Config:
    """Load configuration from a YAML file.

    Note: Values loaded from YAML take precedence over environment variables.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        Config instance loaded from the file.
    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with yaml_file.open("r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    main_config = {}
    for key, value in config_dict.items():
        if key in _NESTED_CONFIGS:
            # Nested sections are built separately so env vars can still fill gaps
            main_config[key] = _NESTED_CONFIGS[key](**(value or {}))
        else:
            main_config[key] = value

    return Config(**main_config)


def reload_config() -> Config:
    """Reload configuration from environment and the YAML file in the config directory."""
    global _config
    _config = None

    base = Config()
    config_yaml = base.get_config_path("config.yaml")
    if config_yaml.exists():
        _config = load_config_from_yaml(str(config_yaml))
    else:
        _config = base

    return _config
