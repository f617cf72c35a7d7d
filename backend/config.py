from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path

# Get the project root directory (parent of backend folder)
PROJECT_ROOT = Path(__file__).parent.parent

class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""
    database_url: str = f"sqlite:///{PROJECT_ROOT / 'learning_plans.db'}"
    sql_echo: bool = False

    # Plan generation
    default_estimated_days: int = 30
    generator_seed: Optional[int] = None  # set for reproducible topic selection

    log_level: str = "INFO"

    class Config:
        env_file = str(PROJECT_ROOT / ".env")

settings = Settings()
