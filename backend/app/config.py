from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./database.db"
    APP_HOST: str = "127.0.0.1"
    APP_PORT: int = 8000
    FRONTEND_ORIGINS: List[str] = ["*"]
    RANDOM_USER_URL: str = "https://randomuser.me/api/"
    PRODUCTS_API_URL: str = "https://fakestoreapi.com/products"
    SEED_USER_COUNT: int = 5
    SEED_ON_STARTUP: bool = True
    # None keeps the httpx default timeout
    HTTP_TIMEOUT_SECONDS: Optional[float] = None
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
