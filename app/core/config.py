from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./newsdesk.db"
    sql_echo: bool = False

    jwt_secret: str
    jwt_algorithm: str = "HS256"
    access_token_minutes: int = 15
    refresh_token_days: int = 7

    # PostgreSQL variables for Docker
    postgres_user: str = ""
    postgres_password: str = ""
    postgres_db: str = ""

    cors_origins: List[str] = ["*"]

    # Pagination
    default_page_size: int = 10
    max_page_size: int = 100

    # Slugs
    slug_max_length: int = 80
    slug_max_attempts: int = 5
    slug_fallback: str = "random"  # "random" or "none"

    log_level: str = "INFO"
    log_serialize: bool = False

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
