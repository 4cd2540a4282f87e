from functools import lru_cache

from pydantic import BaseModel, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AdminAccount(BaseModel):
    """Operator allowed to drive the timeline"""

    email: str
    password: str
    name: str


def _default_admin_accounts() -> list[AdminAccount]:
    names = ["One", "Two", "Three", "Four", "Five"]
    return [
        AdminAccount(
            email=f"admin{number}@event.com",
            password="password123",
            name=f"Admin {name}",
        )
        for number, name in enumerate(names, start=1)
    ]


class Settings(BaseSettings):
    # App
    app_name: str = "Event Timeline"
    app_version: str = "1.0.0"
    debug: bool = False

    # Timeline storage
    data_file: str = "data/timeline.json"

    # Security
    secret_key: str = ""  # Loaded from environment, validated in model_validator
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours
    bcrypt_rounds: int = 12

    # Operators - JSON list in ADMIN_ACCOUNTS, e.g. [{"email": ..., "password": ..., "name": ...}]
    admin_accounts: list[AdminAccount] = _default_admin_accounts()

    # CORS - comma-separated list of allowed origins
    allowed_origins: str = "http://localhost:3000,http://localhost:5173"

    # Request limits
    max_request_size: int = 1024 * 1024  # 1MB
    rate_limit_enabled: bool = True
    login_rate_limit: str = "5/minute"

    @model_validator(mode="after")
    def validate_required_config(self) -> "Settings":
        """Validate required configuration"""
        if not self.secret_key:
            raise ValueError("SECRET_KEY is required. Generate with: openssl rand -hex 32")
        if not self.admin_accounts:
            raise ValueError("ADMIN_ACCOUNTS must contain at least one operator")
        if not 4 <= self.bcrypt_rounds <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return self

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
