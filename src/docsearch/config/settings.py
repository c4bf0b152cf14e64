import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# This file: src/docsearch/config/settings.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
ENV_PATH = PROJECT_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    # Fallback to simple load_dotenv which looks in cwd
    load_dotenv()


DEFAULT_VECTOR_DB_FILENAME = "vector-db.json"


class Settings(BaseModel):
    """Process-wide settings taken from the environment."""

    ENV: str = Field(default="development", description="Environment: development, production, testing")
    LOG_LEVEL: str = Field(default="INFO", description="Log level")

    VECTOR_DB_FILENAME: str = Field(default=DEFAULT_VECTOR_DB_FILENAME, description="Name of the artifact written into the output directory")

    # Remote embedding service (openai_compatible embedder)
    EMBEDDING_BASE_URL: Optional[str] = Field(default=None, description="Base URL of an OpenAI-compatible embeddings API")
    EMBEDDING_API_KEY: Optional[str] = Field(default=None, description="API key for the embeddings API")

    model_config = {
        "frozen": True,
    }


def load_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        ENV=os.getenv("ENV", "development"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        VECTOR_DB_FILENAME=os.getenv("VECTOR_DB_FILENAME", DEFAULT_VECTOR_DB_FILENAME),
        EMBEDDING_BASE_URL=os.getenv("EMBEDDING_BASE_URL"),
        EMBEDDING_API_KEY=os.getenv("EMBEDDING_API_KEY"),
    )


# Global settings instance
settings = load_settings()
