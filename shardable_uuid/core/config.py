from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    ENV: str = "prod"
    EPOCH: int = 0
    REDIS_HOST_INTERNAL: str = "localhost"
    REDIS_HOST_EXTERNAL: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_USERNAME: Optional[str] = None
    REDIS_PASSWORD: Optional[str] = None
    SEQ_KEY_PREFIX: str = "uuid"
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
