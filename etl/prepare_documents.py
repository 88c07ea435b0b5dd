# WORKFLOW: Stage 1 - prepare O*NET occupation documents for embedding.
# Used by: Bootstrap script, document file rebuilds
# Functions:
# 1. prepare_documents() - Tables -> aggregated, composed OccupationDocuments
# 2. write_documents_csv() - Serialize documents to the intermediate CSV
# 3. log_sample_document() - Print one document for manual verification
# 4. run() - Full stage: check inputs, prepare, write
#
# Preparation flow: Required file check -> Parse tables -> Aggregate -> Compose -> CSV
# The CSV is written last, so a failed run never leaves a fresh-looking document file.

"""
Document preparation stage for the O*NET pipeline.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from core.config import settings
from etl.aggregation import build_aggregates
from etl.csv_writer import serialize_records
from etl.document_composer import OccupationDocument, compose_documents
from etl.sources import OCCUPATION_DATA, Occupation, check_required_files, load_tables, to_records

logger = logging.getLogger(__name__)


def prepare_documents(source_dir: Path, skip_malformed_files: Iterable[str]) -> List[OccupationDocument]:
    """
    Read, aggregate and compose the O*NET tables.

    Args:
        source_dir: Directory holding the O*NET text files
        skip_malformed_files: File names whose malformed lines are skipped

    Returns:
        One OccupationDocument per row of the occupation base table
    """
    check_required_files(source_dir)

    try:
        logger.info("Reading and parsing source tables")
        tables = load_tables(source_dir, skip_malformed_files)

        logger.info("Aggregating data by SOC code")
        aggregates = build_aggregates(tables)

        logger.info("Merging aggregates into occupation documents")
        occupations = to_records(tables[OCCUPATION_DATA], Occupation)
        return compose_documents(occupations, aggregates)

    except Exception as e:
        logger.error(f"Failed to prepare occupation documents: {e}")
        raise


def write_documents_csv(documents: List[OccupationDocument], output_path: Path) -> None:
    """
    Write documents to the intermediate CSV file.

    Args:
        documents: Composed occupation documents
        output_path: Destination CSV path; parent directories are created
    """
    try:
        content = serialize_records([document.to_output_row() for document in documents])
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        logger.info(f"Writing output to '{output_path}'")
        output_path.write_text(content, encoding="utf-8")

    except Exception as e:
        logger.error(f"Failed to write document file {output_path}: {e}")
        raise


def log_sample_document(documents: List[OccupationDocument], soc_code: str) -> Optional[OccupationDocument]:
    """Log the embedding text of one occupation, if present."""
    sample = next((d for d in documents if d.soc_code == soc_code), None)
    if sample:
        logger.info(f"Sample document for '{soc_code}: {sample.title}':\n{sample.embedding_text}")
    return sample


def run(
    source_dir: Optional[Path] = None,
    output_path: Optional[Path] = None,
    skip_malformed_files: Optional[Iterable[str]] = None,
) -> List[OccupationDocument]:
    """
    Run the document preparation stage.

    Args:
        source_dir: Overrides settings.source_dir
        output_path: Overrides settings.document_csv_path
        skip_malformed_files: Overrides settings.skip_malformed_files

    Returns:
        The documents written to the CSV
    """
    source_dir = Path(source_dir or settings.source_dir)
    output_path = Path(output_path or settings.document_csv_path)
    if skip_malformed_files is None:
        skip_malformed_files = settings.skip_malformed_files

    logger.info(f"Starting O*NET data preparation from {source_dir}")
    documents = prepare_documents(source_dir, skip_malformed_files)
    write_documents_csv(documents, output_path)

    logger.info(f"Successfully created file with {len(documents)} professions")
    log_sample_document(documents, settings.sample_soc_code)
    return documents


def main() -> int:
    """
    Main function for document preparation.
    """
    try:
        run()
        return 0
    except Exception as e:
        logger.error(f"Document preparation failed: {e}")
        return 1


if __name__ == "__main__":
    import sys
    sys.exit(main())
