"""Configuration management for the Library System API.

Settings are read from ``LIBRARY_API_*`` environment variables (or a ``.env``
file) and validated with Pydantic v2:
1. Service metadata - name and version reported by the API
2. Persistence - SQLite path or an explicit SQLAlchemy URL
3. HTTP binding - host and port for uvicorn
4. Library policy - loan period and password hashing cost
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ApiConfig(BaseSettings):
    """Library System API configuration."""

    model_config = SettingsConfigDict(
        # Use LIBRARY_API_ prefix for all env vars
        env_prefix="LIBRARY_API_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Service Metadata ===

    app_name: str = Field(
        default="library-system-api",
        description="Service name reported in the OpenAPI document",
        pattern=r"^[a-z0-9-]+$",
    )

    app_version: str = Field(
        default="0.1.0",
        description="Service version",
        pattern=r"^\d+\.\d+\.\d+(-[a-zA-Z0-9.]+)?$",
    )

    # === Database Configuration ===

    database_path: Path = Field(
        default=Path("data/library.db"),
        description="SQLite database file path",
    )

    database_url: str | None = Field(
        default=None,
        description="Full SQLAlchemy URL; overrides database_path when set",
        repr=False,  # may carry credentials
    )

    # === HTTP Configuration ===

    http_host: str = Field(
        default="127.0.0.1",
        description="Host the HTTP server binds to",
    )

    http_port: int = Field(
        default=8080,
        description="Port the HTTP server binds to",
        ge=1024,  # Avoid privileged ports
        le=65535,
    )

    api_prefix: str = Field(
        default="/api/Library",
        description="Path prefix shared by every resource router",
        pattern=r"^(/[A-Za-z0-9_-]+)*$",
    )

    # === Library Policy ===

    loan_period_days: int = Field(
        default=14,
        description="Days between borrow date and due date for new loans",
        ge=1,
        le=365,
    )

    bcrypt_rounds: int = Field(
        default=12,
        description="bcrypt cost factor used when hashing user passwords",
        ge=4,
        le=16,
    )

    # === Development Configuration ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Validation Methods ===

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: Path) -> Path:
        """Resolve the database path and make sure its directory exists."""
        abs_path = v.absolute()
        abs_path.parent.mkdir(parents=True, exist_ok=True)

        if not abs_path.parent.is_dir():
            raise ValueError(f"Database directory {abs_path.parent} is not accessible")

        return abs_path

    @field_validator("app_name")
    @classmethod
    def validate_app_name(cls, v: str) -> str:
        """Keep the service name short and readable."""
        if len(v) < 3:
            raise ValueError("App name must be at least 3 characters")
        if len(v) > 50:
            raise ValueError("App name must not exceed 50 characters")
        return v

    @field_validator("http_port")
    @classmethod
    def validate_http_port(cls, v: int) -> int:
        """Reject ports that usually belong to other services."""
        reserved_ports = {3306, 5432, 6379, 27017}
        if v in reserved_ports:
            raise ValueError(f"Port {v} is commonly reserved, choose another")
        return v

    # === Computed Properties ===

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.debug or self.log_level == "DEBUG"

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    def get_database_url(self) -> str:
        """Get SQLAlchemy database URL."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.database_path}"


# === Global Configuration Instance ===


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: ApiConfig | None = None


def get_config() -> ApiConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = ApiConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def set_config(config: ApiConfig) -> None:
    """Install an explicit configuration (used by the app factory)."""
    _ConfigStore._instance = config  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]
