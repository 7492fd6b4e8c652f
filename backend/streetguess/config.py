from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment variables."""
    
    # Scoring
    MAX_POINTS: int = 5000
    SCORE_DECAY_KM: float = 2000.0
    
    # Game Configuration
    ROUNDS_PER_GAME: int = 5
    ROUND_TIME_LIMIT_SECONDS: Optional[float] = None  # None disables the round timer
    RANDOM_SEED: Optional[int] = None
    
    # Catalog
    CATALOG_PATH: Optional[str] = None
    
    # Logging
    LOG_LEVEL: str = "INFO"
    
    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
