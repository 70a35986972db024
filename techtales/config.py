"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )
    
    # Database (articles, comments and the local storage table)
    database_url: str = "sqlite+aiosqlite:///./techtales.db"
    seed_demo_content: bool = True
    
    # Session
    session_storage_key: str = "tech_blog_user"
    simulated_latency_seconds: float = 0.8
    password_hash_rounds: int = 12
    
    # External authorization window
    oauth_timeout_seconds: float = 2.0
    oauth_redirect_uri: str = "http://localhost:5173"
    google_client_id: str = "your-google-client-id"
    github_client_id: str = "your-github-client-id"
    popup_width: int = 600
    popup_height: int = 700
    screen_width: int = 1280
    screen_height: int = 800
    
    # Notifications
    notification_buffer_size: int = 50

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR
    
    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "TechTales"
    version: str = "1.0.0"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
