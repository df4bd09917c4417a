"""
Embeddings feature: embedding utility functions.
Wraps the provider's embedding model for transcript vectors.
"""

import logging
import re

from academy.config import get_settings
from academy.core.embedding_provider import create_embeddings
from academy.core.exceptions import EmbeddingError

logger = logging.getLogger(__name__)

# Singleton embedding model (lazy init)
_embeddings_model = None

_WHITESPACE = re.compile(r"\s+")


def get_embeddings_model():
    """Get or create the shared embeddings model instance."""
    global _embeddings_model
    if _embeddings_model is None:
        _embeddings_model = create_embeddings()
    return _embeddings_model


def prepare_embedding_text(text: str, max_chars: int | None = None) -> str:
    """Collapse whitespace, trim, and cap the length sent to the API."""
    if max_chars is None:
        max_chars = get_settings().EMBEDDING_MAX_CHARS
    return _WHITESPACE.sub(" ", text).strip()[:max_chars]


def build_video_document(title: str, transcript: str) -> str:
    """Title and transcript together give the vector more context."""
    return f"Title: {title}\n\nContent: {transcript}"


def generate_embedding(text: str) -> list[float]:
    """Generate the embedding vector for a transcript.

    Args:
        text: Raw text; normalised and truncated before embedding.

    Returns:
        A list of floats, EMBEDDING_DIMENSIONS long.

    Raises:
        EmbeddingError: If the embedding API fails or returns an empty vector.
    """
    settings = get_settings()
    sanitized = prepare_embedding_text(text, settings.EMBEDDING_MAX_CHARS)

    try:
        model = get_embeddings_model()
        vector = model.embed_query(sanitized)
    except Exception as e:
        logger.error(f"Embedding API error: {e}")
        raise EmbeddingError(str(e)) from e

    if not vector:
        raise EmbeddingError("Embedding API returned an empty vector")

    # Truncate to the column's dimensionality
    return list(vector[:settings.EMBEDDING_DIMENSIONS])
