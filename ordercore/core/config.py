from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"  # "memory" | "json"
    STORE_DATA_DIR: str = "./data/sessions"
    DEFAULT_LOCALE: str = "pt"

    LASTLINK_BASE_URL: str = "https://pay.lastlink.com.br"
    CARTPANDA_BASE_URL: str = "https://cartpanda.com"

    ORDER_WEBHOOK_URL: str | None = None
    ORDER_WEBHOOK_SECRET: str | None = None
    ORDER_WEBHOOK_TIMEOUT_SECONDS: float = 10.0
    ORDER_WEBHOOK_MAX_ATTEMPTS: int = 3
    ORDER_WEBHOOK_BACKOFF_INITIAL: float = 1.0
    ORDER_WEBHOOK_BACKOFF_MAX: float = 8.0
    ORDER_WEBHOOK_TOTAL_TIMEOUT_SECONDS: float = 45.0

    ACCEPTED_PHOTO_SCHEMES: tuple[str, ...] = ("https://",)


settings = Settings()
