"""
Provider-agnostic embedding factory.

Switch embedding provider by changing env vars:
  EMBEDDING_PROVIDER=gemini
  EMBEDDING_MODEL=gemini-embedding-001
  EMBEDDING_API_KEY=your-key
"""

from langchain_core.embeddings import Embeddings

from academy.config import get_settings


def create_embeddings() -> Embeddings:
    """Create an embedding model based on env configuration.

    Returns:
        Embeddings instance for vector generation.

    Raises:
        ValueError: If provider is not supported.
    """
    settings = get_settings()

    match settings.EMBEDDING_PROVIDER:
        case "gemini":
            from langchain_google_genai import GoogleGenerativeAIEmbeddings

            return GoogleGenerativeAIEmbeddings(
                model=f"models/{settings.EMBEDDING_MODEL}",
                google_api_key=settings.EMBEDDING_API_KEY,
            )

        case _:
            raise ValueError(
                f"Unknown embedding provider: '{settings.EMBEDDING_PROVIDER}'. "
                f"Supported: gemini"
            )
