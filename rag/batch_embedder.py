# WORKFLOW: Order-preserving batch embedding of document texts.
# Used by: Vector DB build stage
# Functions:
# 1. iter_batches() - Split a sequence into contiguous bounded slices
# 2. embed_all() - Embed every text batch by batch, output aligned with input
#
# Progress is logged after every batch; callers may also pass a progress callback.
# Batch flow: Texts -> Batch 1 -> embed_fn -> append -> Batch 2 -> ... -> Vectors
# Batches run strictly one after another; the first failure aborts the whole run.

"""
Order-preserving batch embedding.
"""

import logging
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from core.exceptions import EmbeddingBatchError

logger = logging.getLogger(__name__)

EmbedFn = Callable[[List[str]], Sequence[Sequence[float]]]
ProgressCallback = Callable[[int, int], None]


def iter_batches(items: Sequence, batch_size: int) -> Iterator[Tuple[int, Sequence]]:
    """Yield (start index, slice) pairs of at most batch_size items, in order."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")
    for start in range(0, len(items), batch_size):
        yield start, items[start:start + batch_size]


def embed_all(
    texts: Sequence[str],
    batch_size: int,
    embed_fn: EmbedFn,
    progress_callback: Optional[ProgressCallback] = None,
) -> List[List[float]]:
    """
    Embed texts in fixed-size batches.

    Args:
        texts: Texts to embed, in output order
        batch_size: Maximum texts per embed_fn call
        embed_fn: Maps a list of texts to one normalized vector per text
        progress_callback: Called with (processed, total) after every batch, after
            the "Processed batch i/n (p%)" progress line is logged

    Returns:
        List of vectors; index i holds the vector for texts[i]

    Raises:
        EmbeddingBatchError: If embed_fn fails or returns the wrong number of vectors
    """
    total = len(texts)
    batch_count = (total + batch_size - 1) // batch_size if batch_size > 0 else 0
    vectors: List[List[float]] = []

    for number, (start, batch) in enumerate(iter_batches(texts, batch_size), start=1):
        end = start + len(batch)
        try:
            output = embed_fn(list(batch))
        except Exception as e:
            logger.error(f"Embedding batch {number}/{batch_count} failed: {e}")
            raise EmbeddingBatchError(number, start, end, str(e)) from e

        if hasattr(output, "tolist"):
            output = output.tolist()
        if len(output) != len(batch):
            raise EmbeddingBatchError(
                number, start, end,
                f"expected {len(batch)} vectors, got {len(output)}",
            )

        vectors.extend(list(vector) for vector in output)
        logger.info(f"Processed batch {number}/{batch_count} ({len(vectors) / total * 100:.2f}%)")
        if progress_callback:
            progress_callback(len(vectors), total)

    return vectors
