from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# Some settings have default values
class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_URL: str = "http://localhost:8000"
    DATA_PATH: Path = Path("data")
    DATABASE_URL: str | None = None  # Defaults to a SQLite file inside DATA_PATH
    REDIS_URL: str | None = None  # In-memory store when unset
    S3_URL: str = "https://s3.mcjars.app"
    LOG_LEVEL: str = "INFO"
    CACHE_ENABLED: bool = True

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"sqlite+aiosqlite:///{self.DATA_PATH / 'mcjars.db'}"


settings = Settings()

# Ensure the data path exists
settings.DATA_PATH.mkdir(parents=True, exist_ok=True)
