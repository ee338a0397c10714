"""
Configuration settings for the YouTube video analyzer application.
"""

import os
from typing import Dict, List
from pathlib import Path
from dotenv import load_dotenv


# Ensure environment variables are loaded
load_dotenv()


DEFAULT_CAPTION_STRATEGIES = "ytdlp,transcript_api,pytubefix,watch_page,innertube,timedtext"


class Config:
    """Base configuration class."""

    # Application info
    APP_NAME = "YouTube Video Analyzer"
    APP_VERSION = "0.2.0"

    BASE_DIR = Path(__file__).resolve().parent.parent.absolute()
    LOGS_DIR = Path(os.getenv("LOGS_DIR", BASE_DIR / "logs"))

    # API keys
    GROQ_API_KEY = os.getenv("GROQ_API_KEY")
    ANTHROPIC_API_KEY = os.getenv("ANTHROPIC_API_KEY")
    YOUTUBE_API_KEY = os.getenv("YOUTUBE_API_KEY")

    # Language model
    LLM_PROVIDER = os.getenv("LLM_PROVIDER", "groq")
    LLM_MODEL = os.getenv("LLM_MODEL", "llama-3.3-70b-versatile")
    LLM_MAX_TOKENS = int(os.getenv("LLM_MAX_TOKENS", "2500"))
    ANALYSIS_SCHEMA = os.getenv("ANALYSIS_SCHEMA", "detailed").lower()

    # Caption acquisition
    YT_DLP_PATH = os.getenv("YT_DLP_PATH", "yt-dlp")
    CAPTION_STRATEGIES = os.getenv("CAPTION_STRATEGIES", DEFAULT_CAPTION_STRATEGIES)
    METADATA_TIMEOUT = float(os.getenv("METADATA_TIMEOUT", "15"))
    SUBTITLE_TIMEOUT = float(os.getenv("SUBTITLE_TIMEOUT", "30"))

    PUBLIC_URL = os.getenv("PUBLIC_URL", "http://localhost:8000")

    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    @classmethod
    def initialize(cls):
        """Initialize the application configuration."""
        cls.LOGS_DIR.mkdir(parents=True, exist_ok=True)

        # Validate required environment variables
        key_name = f"{cls.LLM_PROVIDER.upper()}_API_KEY"
        if not os.getenv(key_name):
            print(f"WARNING: {key_name} environment variable not set.")
            print("Please set it in the .env file or environment variables.")

    @classmethod
    def get_strategy_names(cls) -> List[str]:
        """Caption strategies in the order they should be attempted."""
        return [name.strip() for name in cls.CAPTION_STRATEGIES.split(",") if name.strip()]

    @classmethod
    def get_paths(cls) -> Dict[str, Path]:
        """Get all application paths."""
        return {
            "base_dir": cls.BASE_DIR,
            "logs_dir": cls.LOGS_DIR,
        }


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG").upper()


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# Determine which configuration to use based on environment
def get_config():
    """Get the appropriate configuration based on environment."""
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env == "production":
        return ProductionConfig
    else:
        return DevelopmentConfig


# Create a config instance
config = get_config()
config.initialize()
