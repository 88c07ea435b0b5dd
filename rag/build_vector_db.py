# WORKFLOW: Stage 2 - build the occupation vector database.
# Used by: Bootstrap script, vector DB rebuilds
# Functions:
# 1. build_vector_db() - Documents -> batch embeddings -> VectorDBEntry list
# 2. run() - Full stage: read CSV, embed, validate, write JSON
#
# Build flow: Document CSV -> Texts -> Batches -> Embedding model -> Entries -> Validation -> JSON file
# A failed batch or a failed validation aborts the stage before anything is written.

"""
Vector database build stage for the O*NET pipeline.
"""

import logging
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from core.config import settings
from etl.csv_writer import read_documents_csv
from etl.document_composer import EMBEDDING_TEXT_COLUMN
from rag.batch_embedder import EmbedFn, embed_all
from rag.vector_store import VectorDBEntry, build_entries, validate_vector_db, write_vector_db

logger = logging.getLogger(__name__)


def build_vector_db(documents: Sequence[Dict[str, Any]], embed_fn: EmbedFn, batch_size: int) -> List[VectorDBEntry]:
    """
    Embed every document and pair it with its vector.

    Args:
        documents: Rows of the document CSV
        embed_fn: Batch embedding function
        batch_size: Documents per embedding call

    Returns:
        One VectorDBEntry per document, in document order
    """
    texts = [doc[EMBEDDING_TEXT_COLUMN] for doc in documents]
    logger.info(f"Generating embeddings for {len(texts)} documents in batches of {batch_size}")

    start_time = time.perf_counter()
    vectors = embed_all(texts, batch_size, embed_fn)
    duration = time.perf_counter() - start_time
    logger.info(f"Generated {len(vectors)} embeddings in {duration:.2f} seconds")

    return build_entries(documents, vectors)


def run(
    input_path: Optional[Path] = None,
    output_path: Optional[Path] = None,
    batch_size: Optional[int] = None,
    embed_fn: Optional[EmbedFn] = None,
    expected_dimension: Optional[int] = None,
) -> List[VectorDBEntry]:
    """
    Run the vector database build stage.

    Args:
        input_path: Overrides settings.document_csv_path
        output_path: Overrides settings.vector_db_path
        batch_size: Overrides settings.embedding_batch_size; must be positive
        embed_fn: Embedding function; defaults to the configured SentenceTransformer model
        expected_dimension: Vector length every entry must have; taken from the
            configured model when embed_fn is not given

    Returns:
        The entries written to the vector database
    """
    input_path = Path(input_path or settings.document_csv_path)
    output_path = Path(output_path or settings.vector_db_path)
    if batch_size is None:
        batch_size = settings.embedding_batch_size
    if batch_size < 1:
        raise ValueError(f"batch_size must be positive, got {batch_size}")

    try:
        logger.info("Starting vector database build")
        documents = read_documents_csv(input_path)

        if embed_fn is None:
            from rag.embeddings import get_embedding_model
            model = get_embedding_model()
            embed_fn = model.encode
            expected_dimension = expected_dimension or model.get_embedding_dimension()

        entries = build_vector_db(documents, embed_fn, batch_size)

        if not validate_vector_db(entries, len(documents), expected_dimension):
            raise ValueError(f"Vector database validation failed, nothing written to {output_path}")

        write_vector_db(entries, output_path)

    except Exception as e:
        logger.error(f"Failed to build vector database: {e}")
        raise

    logger.info("Vector database built and saved successfully")
    return entries


def main() -> int:
    """
    Main function for vector database building.
    """
    try:
        run()
        return 0
    except Exception as e:
        logger.error(f"Vector database building failed: {e}")
        return 1


if __name__ == "__main__":
    import sys
    sys.exit(main())
