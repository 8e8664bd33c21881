from os import getenv
from typing import List


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://taskboard:taskboard@db:5432/taskboard")
    DB_POOL_SIZE = int(getenv("DB_POOL_SIZE", "10"))  # meme limite que l'ancien pool
    DB_ECHO = getenv("DB_ECHO", "0") == "1"
    HOST = getenv("HOST", "0.0.0.0")
    PORT = int(getenv("PORT", "3000"))
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS: List[str] = [o.strip() for o in getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(self, key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

settings = Settings()
