from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Database
    DATABASE_URL: str = "sqlite:///./carebridge.db"

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24

    # Application
    APP_NAME: str = "CareBridge"
    DEBUG: bool = True
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://localhost:5173,"
        "http://127.0.0.1:3000,"
        "http://127.0.0.1:5173"
    )

    # Outbound mail (Gmail SMTP by default)
    MAIL_ENABLED: bool = False
    MAIL_HOST: str = "smtp.gmail.com"
    MAIL_PORT: int = 465
    MAIL_USE_SSL: bool = True
    MAIL_USER: str = ""
    MAIL_PASSWORD: str = ""
    MAIL_FROM: str = ""
    MAIL_TIMEOUT_SECONDS: int = 10

    # Links used inside emails
    FRONTEND_URL: str = "http://localhost:5173"
    ADMIN_DASHBOARD_URL: str = "http://localhost:5173/dashboard/admin"

    # Avatar storage
    MEDIA_DIR: str = "./media"
    MEDIA_URL: str = "/media"
    MAX_AVATAR_BYTES: int = 5 * 1024 * 1024


settings = Settings()
