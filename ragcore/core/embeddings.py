"""
Embedding generation utilities.

Text is turned into vectors by an interchangeable ``Embedder`` strategy. The
default ``FeatureEmbedder`` is deterministic and needs no model: it builds a
384-dimensional bag-of-characters/bag-of-words feature vector. The model-backed
strategies (Ollama, sentence-transformers) can be swapped in without touching
callers of ``EmbeddingGenerator``.
"""
from collections import Counter
from typing import List, Optional, Protocol, Sequence
import re
import unicodedata

import numpy as np
import requests

from ragcore.exceptions import EmbeddingError
from ragcore.utils.logger import get_logger

logger = get_logger(__name__)

FEATURE_DIMENSION = 384
CHAR_FEATURES = 128
WORD_FEATURES = 128
CHAR_OFFSET = 32

_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGITS = re.compile(r"[0-9]")


class Embedder(Protocol):
    """Anything that turns a single text into a vector."""

    dimension: int

    def embed(self, text: str) -> np.ndarray:
        ...


def normalize_text(text: str) -> str:
    """Lowercase, decompose and strip combining diacritical marks."""
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", text.lower()))


class FeatureEmbedder:
    """Deterministic feature-engineered embeddings."""

    dimension = FEATURE_DIMENSION

    def __init__(self, debug: bool = False):
        self.debug = debug

    def embed(self, text: str) -> np.ndarray:
        """
        Build the feature vector for a text.

        Layout:
            0-127   character frequencies for code points 32..159
            128-255 lengths of the 128 most frequent words (/ 20)
            256     text length (/ 10000)
            257     word count (/ 1000)
            258     uppercase ratio
            259     digit ratio
            260-383 zero padding

        The result is L2-normalized. Empty text has no features, so it maps
        to the uniform unit vector.
        """
        if not text:
            if self.debug:
                logger.debug("Empty text, returning uniform embedding")
            return np.full(self.dimension, 1.0 / np.sqrt(self.dimension))

        length = len(text)
        normalized = normalize_text(text)
        embedding = np.zeros(self.dimension, dtype=np.float64)

        char_freq = Counter(normalized)
        for i in range(CHAR_FEATURES):
            embedding[i] = char_freq.get(chr(i + CHAR_OFFSET), 0) / length

        words = normalized.split()
        word_freq = Counter(words)
        # sorted() is stable, so equal counts keep first-seen order
        top_words = sorted(word_freq, key=lambda w: word_freq[w], reverse=True)[:WORD_FEATURES]
        for i, word in enumerate(top_words):
            embedding[CHAR_FEATURES + i] = len(word) / 20

        stats = CHAR_FEATURES + WORD_FEATURES
        embedding[stats] = length / 10000
        embedding[stats + 1] = len(words) / 1000
        embedding[stats + 2] = len(_UPPERCASE.findall(text)) / length
        embedding[stats + 3] = len(_DIGITS.findall(text)) / length

        return embedding / np.linalg.norm(embedding)


class OllamaEmbedder:
    """Embeddings from a local Ollama server, falling back to features."""

    def __init__(
        self,
        model: str = "nomic-embed-text",
        url: str = "http://localhost:11434",
        timeout: float = 30.0,
        fallback: Optional[FeatureEmbedder] = None,
        dimension: int = 768,
    ):
        self.model = model
        self.url = url.rstrip("/")
        self.timeout = timeout
        self.fallback = fallback if fallback is not None else FeatureEmbedder()
        self.model_dimension = dimension
        self.degraded = False

    @property
    def dimension(self) -> int:
        """Width of the vectors currently returned."""
        return self.fallback.dimension if self.degraded else self.model_dimension

    def embed(self, text: str) -> np.ndarray:
        """
        Embed with the Ollama model.

        After the first failed request the embedder stays on the feature
        path, so vectors it returns from then on share one width. Build a new
        embedder to try the server again.
        """
        if self.degraded:
            return self.fallback.embed(text)
        try:
            return self._request(text)
        except EmbeddingError as e:
            logger.warning(
                "Ollama embedding failed, switching to feature embeddings",
                model=self.model,
                error=str(e),
            )
            self.degraded = True
            return self.fallback.embed(text)

    def _request(self, text: str) -> np.ndarray:
        """Call the embeddings endpoint and validate the payload."""
        try:
            response = requests.post(
                f"{self.url}/api/embeddings",
                json={"model": self.model, "prompt": text},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            raise EmbeddingError(f"Ollama API error: {e}") from e

        embedding = data.get("embedding") if isinstance(data, dict) else None
        if not isinstance(embedding, list) or not embedding:
            raise EmbeddingError("Invalid response from Ollama API: missing embedding array")

        return np.asarray(embedding, dtype=np.float64)


class SentenceTransformerEmbedder:
    """Embeddings from a sentence-transformers model, loaded on first use."""

    def __init__(self, model_name: str = "all-MiniLM-L6-v2"):
        self.model_name = model_name
        self._model = None
        self._dimension: Optional[int] = None

    @property
    def model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            logger.info("Loading embedding model", model=self.model_name)
            self._model = SentenceTransformer(self.model_name)
            self._dimension = self._model.get_sentence_embedding_dimension()
            logger.info("Model loaded", dimension=self._dimension)
        return self._model

    @property
    def dimension(self) -> int:
        if self._dimension is None:
            self._dimension = self.model.get_sentence_embedding_dimension()
        return self._dimension

    def embed(self, text: str) -> np.ndarray:
        return self.model.encode(text, convert_to_numpy=True)


EMBEDDING_BACKENDS = ("features", "ollama", "sentence-transformers")


def build_embedder(settings) -> Embedder:
    """Create the embedder selected by ``settings.embedding_backend``."""
    backend = settings.embedding_backend.lower()
    if backend == "features":
        return FeatureEmbedder(debug=settings.debug)
    if backend == "ollama":
        return OllamaEmbedder(
            model=settings.ollama_embedding_model,
            url=settings.ollama_url,
            timeout=settings.request_timeout,
            fallback=FeatureEmbedder(debug=settings.debug),
        )
    if backend == "sentence-transformers":
        return SentenceTransformerEmbedder(settings.embedding_model)
    raise ValueError(
        f"Unknown embedding backend '{settings.embedding_backend}'. "
        f"Expected one of: {', '.join(EMBEDDING_BACKENDS)}"
    )


class EmbeddingGenerator:
    """Handles text embedding generation."""

    def __init__(self, embedder: Optional[Embedder] = None, debug: bool = False):
        """Initialize with an embedding strategy (feature embeddings by default)."""
        self.embedder = embedder if embedder is not None else FeatureEmbedder(debug=debug)
        self.debug = debug

    @property
    def dimension(self) -> int:
        return self.embedder.dimension

    def generate_embedding(self, text: str) -> np.ndarray:
        """Generate embedding for a single text."""
        embedding = self.embedder.embed(text)
        if self.debug:
            logger.debug("Generated embedding", chars=len(text), dimensions=len(embedding))
        return embedding

    def generate_embeddings(self, texts: Sequence[str]) -> np.ndarray:
        """
        Generate embeddings for a list of texts.

        Args:
            texts: Texts to embed

        Returns:
            Array of shape (len(texts), dimension), rows in input order
        """
        if len(texts) == 0:
            return np.empty((0, self.dimension))

        embeddings: List[np.ndarray] = [self.generate_embedding(text) for text in texts]

        # A strategy that changed width mid-batch is asked again for every text
        if len({len(embedding) for embedding in embeddings}) > 1:
            logger.warning("Embedding widths changed during batch, re-embedding", count=len(texts))
            embeddings = [self.generate_embedding(text) for text in texts]

        if self.debug:
            logger.debug("Generated embeddings", count=len(embeddings))
        return np.vstack(embeddings)
