from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_backend: str = "http"
    api_base_url: str = "http://localhost:5000"
    api_prefix: str = "/api/patent"
    http_timeout_seconds: int = 30

    poll_interval_seconds: float = 2.0
    max_poll_attempts: int = 300

    max_upload_size_mb: int = 50
    report_dir: str = "."
