from .loader import AppConfig, ConfigError, DatabaseConfig, ServerConfig, load_config

__all__ = [
    "AppConfig",
    "ConfigError",
    "DatabaseConfig",
    "ServerConfig",
    "load_config",
]
