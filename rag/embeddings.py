# WORKFLOW: Sentence embedding model for occupation documents.
# Used by: Vector DB build stage
# Functions:
# 1. encode() - Embed one batch of texts (mean pooled, L2 normalized)
# 2. get_embedding_dimension() - Get model output dimension
#
# Embedding flow: Document texts -> SentenceTransformer -> Normalized embeddings -> Vector DB
# EmbeddingModel.encode is the embed function handed to the batch embedder,
# which owns batching and ordering.

from sentence_transformers import SentenceTransformer
from typing import List, Optional, Union
import numpy as np
import logging
from core.config import settings

logger = logging.getLogger(__name__)


class EmbeddingModel:
    """SentenceTransformer embedding model wrapper."""

    def __init__(self, model_name: Optional[str] = None):
        self.model_name = model_name or settings.embedding_model
        self.model = None
        self._load_model()

    def _load_model(self):
        """Load the embedding model."""
        try:
            logger.info(f"Loading bi-encoder model: {self.model_name}")
            self.model = SentenceTransformer(
                self.model_name,
                cache_folder=settings.model_cache_dir
            )
            logger.info("Model loaded successfully")
        except Exception as e:
            logger.error(f"Failed to load embedding model: {e}")
            raise

    def encode(self, texts: Union[str, List[str]], normalize: bool = True) -> np.ndarray:
        """
        Encode texts to embeddings.

        Args:
            texts: Single text or list of texts
            normalize: Whether to L2-normalize embeddings

        Returns:
            Embeddings as numpy array, one row per text
        """
        if isinstance(texts, str):
            texts = [texts]

        return self.model.encode(
            texts,
            batch_size=len(texts) or 1,
            normalize_embeddings=normalize,
            convert_to_numpy=True,
            show_progress_bar=False,
        )

    def get_embedding_dimension(self) -> int:
        """Get the embedding dimension."""
        if self.model is None:
            raise ValueError("Model not loaded")
        return self.model.get_sentence_embedding_dimension()


# Embedding model instances keyed by model name (lazy-loaded)
_embedding_models = {}

def get_embedding_model(model_name: Optional[str] = None) -> EmbeddingModel:
    """Get a shared embedding model instance (lazy-loaded)."""
    name = model_name or settings.embedding_model
    if name not in _embedding_models:
        _embedding_models[name] = EmbeddingModel(name)
    return _embedding_models[name]
