# eventops/core/config.py

from typing import List, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (or a local .env file).
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str = "local"

    # --- Database URLs ---
    DATABASE_URL_PROD: Optional[str] = None
    DATABASE_URL_LOCAL: str = "sqlite:///./eventops.db"

    # --- Auth ---
    JWT_SECRET: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    # PKCS8 private key / SubjectPublicKeyInfo public key, used when JWT_ALGORITHM=RS256
    JWT_PRIVATE_KEY: Optional[str] = None
    JWT_PUBLIC_KEY: Optional[str] = None
    JWT_KEY_ID: str = "eventops-key-1"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    PASSWORD_HASH_ITERATIONS: int = 260000

    # --- AI assistant ---
    ANTHROPIC_API_KEY: Optional[str] = None
    ASSISTANT_MODEL: str = "claude-sonnet-4-5-20250929"
    ASSISTANT_MAX_TOKENS: int = 1500
    ASSISTANT_MAX_TOOL_ROUNDS: int = 5

    # --- Misc ---
    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:5173"
    ENABLE_SCHEDULER: bool = True
    RATE_LIMIT_ENABLED: bool = True
    LOG_LEVEL: str = "INFO"

    # --- Dynamic Properties ---
    @property
    def DATABASE_URL(self) -> str:
        if self.ENV == "local" or not self.DATABASE_URL_PROD:
            return self.DATABASE_URL_LOCAL
        return self.DATABASE_URL_PROD

    def get_cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Create a single instance of the settings
settings = Settings()
