from pydantic_settings import BaseSettings
from typing import Optional, List

class Settings(BaseSettings):
    PROJECT_NAME: str = "Quild Academy API"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # CORS
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ]

    # Database Configuration
    DATABASE_HOST: Optional[str] = None
    DATABASE_PORT: str = "5432"
    DATABASE_USER: Optional[str] = None
    DATABASE_PASSWORD: Optional[str] = None
    DATABASE_NAME: Optional[str] = None

    DATABASE_URL: str = ""
    DATABASE_ECHO: bool = False

    def __init__(self, **data):
        super().__init__(**data)
        if not self.DATABASE_URL:
            if self.DATABASE_HOST:
                self.DATABASE_URL = (
                    f'postgresql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}'
                    f'@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}'
                )
            else:
                self.DATABASE_URL = "sqlite:///./quild.db"

    # Session tokens issued by the identity provider
    AUTH_JWT_KEY: str = ""
    AUTH_JWT_ALGORITHM: str = "RS256"
    AUTH_JWT_AUDIENCE: Optional[str] = None

    # Identity provider
    CLERK_API_URL: str = "https://api.clerk.com/v1"
    CLERK_SECRET_KEY: Optional[str] = None
    CLERK_WEBHOOK_SECRET: Optional[str] = None
    IDENTITY_PROVIDER_TIMEOUT: float = 5.0

    # Cache
    CACHE_ENABLED: bool = True
    CACHE_TTL: int = 300
    REDIS_URL: Optional[str] = None

    SEED_ENABLED: bool = True
    PROGRESS_WRITE_MAX_ATTEMPTS: int = 3

    LOG_DIR: str = "logs"

    class Config:
        env_file = ".env"

settings = Settings()
