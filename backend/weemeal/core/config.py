# weemeal/core/config.py
# Environment loading (.env)
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "weemeal"
    MONGODB_CONNECT_RETRIES: int = 20
    # per-attempt server selection budget
    MONGODB_TIMEOUT_MS: int = 5000

    # AI translation / tag suggestions. Unset key means "not available".
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_MODEL: str = "gpt-4o-mini"

    UNSPLASH_ACCESS_KEY: Optional[str] = None

    # Public base URL the Bring! servers call back into; unset -> the URL the request came in on
    APP_URL: Optional[str] = None
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Seconds before a translation/search call is abandoned for the next fallback
    COLLABORATOR_TIMEOUT: float = 8.0

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
