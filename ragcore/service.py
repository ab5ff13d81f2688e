"""
Module-level entry points backed by shared default components.

These are what the surrounding application calls. Components are built once
from settings, and building them configures logging from
``settings.log_level``. Callers that need different settings construct
``EmbeddingGenerator`` or ``QueryExpander`` themselves.
"""
from functools import lru_cache
from typing import List, Sequence

import numpy as np

from ragcore.agents.expander import QueryExpander
from ragcore.agents.model_runner import OllamaCLIRunner
from ragcore.config import get_settings
from ragcore.core.embeddings import EmbeddingGenerator, build_embedder
from ragcore.utils.logger import configure_logging, get_logger

logger = get_logger(__name__)


@lru_cache()
def get_embedding_generator() -> EmbeddingGenerator:
    """Get the shared embedding generator."""
    settings = get_settings()
    configure_logging(settings)
    return EmbeddingGenerator(build_embedder(settings), debug=settings.debug)


@lru_cache()
def get_query_expander() -> QueryExpander:
    """Get the shared query expander."""
    settings = get_settings()
    configure_logging(settings)
    config = settings.expander_config()
    runner = OllamaCLIRunner(binary=settings.ollama_binary, timeout=config.timeout)
    if not runner.is_available():
        logger.warning(
            "Ollama binary not found, queries will not be expanded",
            binary=settings.ollama_binary,
        )
    return QueryExpander(config, runner, debug=settings.debug)


def generate_embedding(text: str) -> np.ndarray:
    """Embed one text with the shared generator."""
    return get_embedding_generator().generate_embedding(text)


def generate_embeddings(texts: Sequence[str]) -> np.ndarray:
    """Embed several texts with the shared generator, rows in input order."""
    return get_embedding_generator().generate_embeddings(texts)


def expand_query(original_query: str) -> List[str]:
    """
    Expand a query with the shared expander.

    Never raises for model failures; the result is then ``[original_query]``.
    """
    return get_query_expander().expand_query(original_query)
