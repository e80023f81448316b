"""Configuration management using pydantic-settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    database_path: str = "./data/users.db"
    cors_origins: list[str] = ["http://localhost:3000"]

    host: str = "0.0.0.0"
    port: int = 8080

    # JWT Configuration
    # No usable default: the app refuses to start while this is empty
    jwt_secret_key: str = ""
    jwt_expiry_hours: int = 24

    # Bcrypt work factor (higher = more secure but slower)
    # For tests, use 4 for faster execution while maintaining functionality
    bcrypt_work_factor: int = 12

    # Security Configuration
    # Answer forgot-password requests for unknown emails with the same 401
    # as a wrong security answer instead of a 404
    hide_recovery_user_existence: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )
