"""Application configuration with environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    ENV: str = "dev"
    VERSION: str = "1.0.0"
    LOG_LEVEL: str = "INFO"

    # Routing
    API_PREFIX: str = "/api/v1"
    API_V2_PREFIX: str = "/api/v2"

    # Database
    DATABASE_URL: str

    # Bearer token (supports key rotation)
    JWT_SECRET: str = "change-this-in-production"
    JWT_SECRET_PREVIOUS: str = ""  # Set during rotation, clear after
    JWT_EXPIRES_HOURS: int = 24

    # CORS
    CORS_ORIGINS: str = "http://localhost:3000"

    # Cache (REDIS_URL wins over host/port when both are set)
    REDIS_URL: str = ""
    REDIS_HOST: str = ""
    REDIS_PORT: int = 6379
    REDIS_PASSWORD: str = ""
    REDIS_DB: int = 0
    CACHE_TTL_SECONDS: int = 5

    # Object storage (S3 or S3-compatible)
    S3_ENDPOINT_URL: str = ""
    S3_BUCKET: str = "volunteer-platform"
    S3_REGION: str = "us-east-1"
    S3_URL_STYLE: str = ""  # "path" or "virtual"
    S3_PUBLIC_URL_TEMPLATE: str = ""  # e.g. https://cdn.example.com/{bucket}/{key}
    AWS_ACCESS_KEY_ID: str = ""
    AWS_SECRET_ACCESS_KEY: str = ""

    # Message queue
    RABBITMQ_URL: str = ""

    # External chat service (support tickets)
    CHATTY_URL: str = ""
    CHATTY_API_KEY: str = ""
    CHATTY_TIMEOUT_SECONDS: float = 10.0

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS_ORIGINS into a list."""
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def jwt_secrets(self) -> list[str]:
        """Returns list of valid secrets (current first, then previous if set)."""
        secrets = [self.JWT_SECRET]
        if self.JWT_SECRET_PREVIOUS:
            secrets.append(self.JWT_SECRET_PREVIOUS)
        return secrets

    @property
    def chat_enabled(self) -> bool:
        return bool(self.CHATTY_URL.strip() and self.CHATTY_API_KEY.strip())


settings = Settings()
