"""
Configuration module for the RAG core.
"""
from pydantic_settings import BaseSettings
from functools import lru_cache

from ragcore.models import ExpanderConfig


class Settings(BaseSettings):
    """Core settings loaded from environment variables."""

    # Application
    debug: bool = False
    log_level: str = "INFO"

    # Embeddings
    embedding_backend: str = "features"
    embedding_model: str = "all-MiniLM-L6-v2"
    ollama_embedding_model: str = "nomic-embed-text"
    request_timeout: float = 30.0

    # Ollama
    ollama_url: str = "http://localhost:11434"
    ollama_model: str = "llama2"
    ollama_binary: str = "ollama"

    # Query Expansion
    num_variations: int = 3
    expansion_timeout: float = 120.0

    class Config:
        env_file = ".env"
        case_sensitive = False

    def expander_config(self) -> ExpanderConfig:
        """Build the query expander configuration from these settings."""
        return ExpanderConfig(
            model=self.ollama_model,
            url=self.ollama_url,
            num_variations=self.num_variations,
            timeout=self.expansion_timeout,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
