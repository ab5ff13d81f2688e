"""
Core module.
"""
from .embeddings import (
    Embedder,
    EmbeddingGenerator,
    FeatureEmbedder,
    OllamaEmbedder,
    SentenceTransformerEmbedder,
    build_embedder,
)
from .similarity import cosine_similarity, rank_by_similarity

__all__ = [
    "Embedder",
    "EmbeddingGenerator",
    "FeatureEmbedder",
    "OllamaEmbedder",
    "SentenceTransformerEmbedder",
    "build_embedder",
    "cosine_similarity",
    "rank_by_similarity",
]
