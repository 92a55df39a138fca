from typing import List, Optional
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str
    LOG_LEVEL: str = "INFO"

    # League and fixture defaults
    LEAGUE_NAME: str = "Seasonal League"
    FIXTURE_WEEKS: int = 5
    FIXTURE_WEEKDAY: int = 1  # Tuesday (date.weekday() numbering)
    FIXTURE_TIME_SLOTS: List[str] = ["8:00", "10:00", "12:00", "14:00"]

    # Image hosting
    IMGBB_API_KEY: Optional[str] = None
    IMGBB_UPLOAD_URL: str = "https://api.imgbb.com/1/upload"

    # Invite emails
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 465
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    APP_URL: str = "http://localhost:3000"

    # User id granted the admin role on startup
    BOOTSTRAP_ADMIN_ID: Optional[str] = None

    # Go up two levels from core/config.py → project root
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[2] / ".env"),
        extra="ignore",
    )


settings = Settings()
