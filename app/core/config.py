from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional


class Settings(BaseSettings):
    # Database
    DB_HOST: str = Field("localhost")
    DB_PORT: int = Field(5432)
    DB_USER: str = Field("postgres")
    DB_PASSWORD: str = Field("postgres")
    DB_NAME: str = Field("restaurant")
    # full URL wins over the granular fields when set
    DATABASE_URL: Optional[str] = Field(None)

    # App
    APP_HOST: str = Field("0.0.0.0")
    APP_PORT: int = Field(8080)
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    # JWT / Auth
    SECRET_KEY: str = Field("defaultsecret")
    ALGORITHM: str = Field("HS256")
    ACCESS_TOKEN_EXPIRE_MS: int = Field(86400000)
    JWT_COOKIE_NAME: str = Field("jwtToken")

    # Anti-forgery
    CSRF_ENABLED: bool = Field(True)
    CSRF_COOKIE_NAME: str = Field("XSRF-TOKEN")
    CSRF_HEADER_NAME: str = Field("X-XSRF-TOKEN")

    # Logging
    LOG_LEVEL: str = Field("INFO")
    LOG_DIR: Optional[str] = Field(None)

    # Bootstrap admin, created on startup when no user with this name exists
    ADMIN_USERNAME: Optional[str] = Field(None)
    ADMIN_EMAIL: Optional[str] = Field(None)
    ADMIN_PASSWORD: Optional[str] = Field(None)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="allow"
    )


settings = Settings()
