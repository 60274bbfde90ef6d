from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


_package_dir = Path(__file__).resolve().parent


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    SECRET_KEY: str = "change-me"
    SESSION_TTL: int = Field(default=86400, ge=1, description="Session token lifetime, seconds")

    RANDOM_URL: str = "https://www.random.org/integers/"
    RANDOM_TIMEOUT: float = Field(default=10.0, gt=0)

    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = Field(default=8000, ge=1, le=65535)
    CLIENT_DIR: Path = _package_dir / "client"


settings = Settings()
