from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_CLASSIFY: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_CLASSIFY: float = 0.0
    OPENAI_TIMEOUT_SECONDS: float = 8.0

    RESEND_API_KEY: str | None = None
    RESEND_ENDPOINT: str = "https://api.resend.com/emails"
    EMAIL_FROM_ADDRESS: str = "no-reply@example.com"
    EMAIL_TIMEOUT_SECONDS: float = 10.0

    DATABASE_URL: str = "sqlite:///./data/businesses.db"
    ADMIN_TOKEN: str | None = None

    PUBLIC_BASE_URL: str = "http://localhost:8787"
    DASHBOARD_URL: str | None = None
    MAGIC_LINK_TTL_MINUTES: int = 15

    SESSION_TTL_SECONDS: int = 1800
    DEFAULT_TIMEZONE: str = "Europe/Zurich"

    CORS_ALLOW_ORIGINS: list[str] = ["*"]
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
