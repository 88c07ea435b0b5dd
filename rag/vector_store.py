# WORKFLOW: Flat JSON vector database for occupation embeddings.
# Used by: Vector DB build stage, downstream consumers loading the file
# Functions:
# 1. build_entries() - Pair documents with their vectors
# 2. write_vector_db() - Persist all entries as one JSON array (atomic replace)
# 3. validate_vector_db() - Check entry count and vector dimension consistency
#
# Storage flow: Documents + Vectors -> VectorDBEntry list -> validation -> temp file -> final path
# Embedding text is not stored; consumers read it from the document CSV if needed.

"""
Flat JSON vector database.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from pydantic import BaseModel, Field, TypeAdapter

from etl.document_composer import TITLE_COLUMN
from etl.tsv_parser import SOC_CODE_COLUMN

logger = logging.getLogger(__name__)


class VectorDBEntry(BaseModel):
    """One occupation in the vector database."""
    soc: str = Field(..., description="O*NET-SOC code")
    title: str = Field(..., description="Official occupation title")
    embedding: List[float] = Field(..., description="Mean pooled, L2 normalized vector")


_entries_adapter = TypeAdapter(List[VectorDBEntry])


def build_entries(documents: Sequence[Mapping[str, Any]], vectors: Sequence[Sequence[float]]) -> List[VectorDBEntry]:
    """
    Pair document rows with their vectors.

    Args:
        documents: Rows of the document CSV
        vectors: One vector per document, same order

    Returns:
        List of VectorDBEntry in document order
    """
    if len(documents) != len(vectors):
        raise ValueError(f"Got {len(vectors)} vectors for {len(documents)} documents")

    return [
        VectorDBEntry(soc=doc[SOC_CODE_COLUMN], title=doc[TITLE_COLUMN], embedding=list(vector))
        for doc, vector in zip(documents, vectors)
    ]


def write_vector_db(entries: List[VectorDBEntry], path: Path) -> None:
    """
    Write entries as a single JSON array.

    The file is written next to its destination and moved into place once
    complete.

    Args:
        entries: Vector database entries in output order
        path: Destination JSON path; parent directories are created
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = _entries_adapter.dump_json(entries)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(payload)
        os.replace(tmp_name, path)
    except Exception as e:
        logger.error(f"Failed to write vector database {path}: {e}")
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise

    logger.info(f"Saved {len(entries)} entries to vector database {path}")


def validate_vector_db(entries: List[VectorDBEntry], expected_count: int,
                       expected_dimension: Optional[int] = None) -> bool:
    """
    Validate vector database integrity.

    Args:
        entries: Entries about to be written, or read back from disk
        expected_count: Number of source documents
        expected_dimension: Output dimension of the embedding model, if known

    Returns:
        True if the entry count matches and all vectors share the expected dimension
    """
    if len(entries) != expected_count:
        logger.error(f"Vector database has {len(entries)} entries, expected {expected_count}")
        return False

    dimensions = {len(entry.embedding) for entry in entries}
    if len(dimensions) > 1:
        logger.error(f"Vector database has mixed dimensions: {sorted(dimensions)}")
        return False

    if expected_dimension is not None and dimensions and dimensions != {expected_dimension}:
        logger.error(f"Vector database dimension {sorted(dimensions)} does not match model dimension {expected_dimension}")
        return False

    stats: Dict[str, Any] = {"entries": len(entries), "dimension": dimensions.pop() if dimensions else 0}
    logger.info(f"Vector database statistics: {json.dumps(stats)}")
    return True
