"""
Embeddings feature: Schemas for request/response models.
"""

from academy.core.schemas import ActionResult


class BulkEmbeddingResult(ActionResult):
    """Outcome of one sequential indexing sweep."""
    processed: int = 0
    failed: int = 0
    failed_ids: list[str] = []
