from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "scanverdict-backend"
    ENVIRONMENT: str = "local"
    LOG_LEVEL: str = "INFO"

    # Upstream scan aggregator (n8n webhook that fans out to WHOIS/DNS/VT/etc.)
    SCAN_WEBHOOK_URL: str | None = None
    SCAN_TIMEOUT_SECONDS: float = 60.0

    # Database (scan history)
    DATABASE_URL: str = "sqlite:///./scanverdict.db"

    # History: one JSON document stored under a fixed key
    HISTORY_STORAGE_KEY: str = "urlscanner.history.v1"
    HISTORY_MAX_ITEMS: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
