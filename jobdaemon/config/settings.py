from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    """
    Configuration settings for the daemon.
    """

    # Browser settings
    HEADLESS: bool = True
    # None uses the bundled Chromium; "chrome" uses the system Chrome install
    BROWSER_CHANNEL: Optional[str] = None
    IGNORE_HTTPS_ERRORS: bool = True

    # Retries
    MAX_RETRIES: int = 3
    RETRY_BASE_DELAY: float = 5.0  # seconds
    RETRY_MAX_DELAY: float = 10.0  # seconds

    # Timeouts
    NAVIGATION_TIMEOUT: int = 30000  # ms
    SELECTOR_TIMEOUT: int = 10000  # ms
    HTTP_TIMEOUT: float = 20.0  # seconds

    # Sources (see jobdaemon.adapters.registry for the available names)
    ENABLED_SOURCES: List[str] = ["internlist"]

    # Infinite-scroll pagination
    SCROLL_SETTLE_SECONDS: float = 1.5
    SCROLL_MAX_ITERATIONS: int = 30
    SCROLL_IDLE_LIMIT: int = 5

    # CSV export download
    DOWNLOAD_DIR: Path = BASE_DIR / "downloads"
    DOWNLOAD_ATTEMPTS: int = 3
    DOWNLOAD_POLL_SECONDS: float = 10.0

    # Freshness is evaluated against "today" in this timezone
    TIMEZONE: str = "America/New_York"

    # Persistence
    DB_PATH: Path = BASE_DIR / "jobs.db"

    # Scheduling & dispatch
    SCHEDULE_INTERVAL_MINUTES: int = 10
    DISPATCH_DELAY_SECONDS: float = 2.0  # between Discord messages

    # Notifications
    DISCORD_WEBHOOK_URL: Optional[str] = None
    EMAIL_USER: Optional[str] = None
    EMAIL_PASS: Optional[str] = None
    EMAIL_RECIPIENT: Optional[str] = None
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587

    # Health-check listener
    PORT: int = 3000

    LOG_LEVEL: str = "INFO"


settings = Settings()
