"""
Local RAG core: embeddings, similarity scoring and query expansion.
"""
from .config import get_settings, Settings
from .models import ExpanderConfig
from .exceptions import (
    RagCoreError,
    DimensionMismatch,
    EmbeddingError,
    ModelRunnerError,
    SubprocessSpawnFailure,
    SubprocessExitFailure,
    SubprocessTimeout,
)
from .core.similarity import cosine_similarity
from .utils.logger import configure_logging
from .service import (
    generate_embedding,
    generate_embeddings,
    expand_query,
    get_embedding_generator,
    get_query_expander,
)

__version__ = "1.0.0"

__all__ = [
    "get_settings",
    "Settings",
    "ExpanderConfig",
    "RagCoreError",
    "DimensionMismatch",
    "EmbeddingError",
    "ModelRunnerError",
    "SubprocessSpawnFailure",
    "SubprocessExitFailure",
    "SubprocessTimeout",
    "cosine_similarity",
    "configure_logging",
    "generate_embedding",
    "generate_embeddings",
    "expand_query",
    "get_embedding_generator",
    "get_query_expander",
]
