import os
from pydantic_settings import BaseSettings
from functools import lru_cache
# Load environment variables from .env file
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    """Application settings configuration using Pydantic.

    This centralizes all environment variables and configuration settings.
    Values can be overridden by environment variables with the same name.
    """
    # Hosted backend (PostgREST + auth provider share the project URL)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    STORE_TIMEOUT: int = int(os.getenv("STORE_TIMEOUT", "15"))

    # API settings
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Community Admin Dashboard API"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # CORS settings
    CORS_ORIGINS: list[str] = [
        "http://localhost",
        "http://localhost:3000",
        "http://localhost:8000",
    ]

    # Role claims allowed into the dashboard
    ADMIN_ROLES: list[str] = ["admin", "super_admin"]

    # Calendar days (past events, "Today" labels) are computed in this zone
    APP_TIMEZONE: str = os.getenv("APP_TIMEZONE", "UTC")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "logs")  # empty disables the JSON file log

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in validation


@lru_cache
def get_settings() -> Settings:
    """Create cached instance of settings.

    Returns:
        Settings: Application settings
    """
    return Settings()
