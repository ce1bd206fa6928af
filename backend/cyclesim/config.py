from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    CATALOG_PATH: str = ""
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]
    DEFAULT_SEED: Optional[int] = None
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
