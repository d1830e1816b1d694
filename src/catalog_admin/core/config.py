import logging
import os
from pathlib import Path
from typing import Annotated, Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

log_format = logging.Formatter("%(asctime)s : %(levelname)s - %(message)s")

# root logger
root_logger = logging.getLogger()
root_logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

# standard stream handler
stream_handler = logging.StreamHandler()
stream_handler.setFormatter(log_format)
root_logger.addHandler(stream_handler)

logger = logging.getLogger(__name__)

# Optional .env file, real environment variables take precedence
env_path = Path(os.getenv("ENV_FILE", ".env"))
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
    logger.info(f"Loaded environment from {env_path}")
else:
    logger.debug(f"No .env file at {env_path}, using process environment")


class Settings(BaseSettings):
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "catalog-admin-api"
    ENV: str = Field(default_factory=lambda: os.getenv("ENV", "development"))

    # Database Configuration
    DATABASE_URL: Optional[str] = Field(
        default_factory=lambda: os.getenv("DATABASE_URL"),
        description="postgresql+asyncpg:// URL, sqlite+aiosqlite:// for local runs",
    )
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 10
    DB_ECHO: bool = False

    # Server Configuration
    SERVER_PORT: int = 8001
    BACKEND_CORS_ORIGINS: Annotated[list[str], NoDecode] = ["http://localhost:3000"]
    LOG_LEVEL: str = "INFO"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, list[str]]) -> list[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, list):
            return v
        elif isinstance(v, str):
            return [i.strip(" \"'") for i in v.strip("[]").split(",") if i.strip(" \"'")]
        raise ValueError(v)

    @property
    def is_sqlite(self) -> bool:
        return bool(self.DATABASE_URL) and self.DATABASE_URL.startswith("sqlite")

    model_config = SettingsConfigDict(extra="ignore")


settings = Settings()

# Validate required settings
if not settings.DATABASE_URL:
    raise ValueError("DATABASE_URL environment variable is required")
