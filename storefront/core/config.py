import os
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


class Settings:
    APP_NAME: str = "Syntax Wear API"
    APP_VERSION: str = "1.0.0"
    DATABASE_URL: str = "sqlite:///./storefront.db"
    JWT_SECRET: str = "changeme"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24 * 7  # 7 days
    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: str = "*"

    def __init__(self, **overrides):
        self.APP_NAME = os.getenv("APP_NAME", self.APP_NAME)
        self.APP_VERSION = os.getenv("APP_VERSION", self.APP_VERSION)
        self.DATABASE_URL = os.getenv("DATABASE_URL", self.DATABASE_URL)
        self.JWT_SECRET = os.getenv("JWT_SECRET", self.JWT_SECRET)
        self.JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", self.JWT_ALGORITHM)
        self.ACCESS_TOKEN_EXPIRE_MINUTES = int(
            os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", self.ACCESS_TOKEN_EXPIRE_MINUTES)
        )
        self.BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", self.BCRYPT_ROUNDS))
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", self.LOG_LEVEL)
        self.CORS_ORIGINS = os.getenv("CORS_ORIGINS", self.CORS_ORIGINS)

        for key, value in overrides.items():
            if not hasattr(Settings, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
