# WORKFLOW: CSV serialization of composed occupation documents.
# Used by: Document preparation stage (write), vector DB stage (read back)
# Functions:
# 1. escape_field() - Quote a value containing commas, quotes or newlines
# 2. serialize_records() - Render records as comma-delimited text with a header
# 3. read_documents_csv() - Load the intermediate document file back into rows
#
# Output format: header row + one row per document, RFC4180-style quoting,
# rows joined by newlines with no trailing newline.

"""
CSV serialization of composed occupation documents.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

import pandas as pd

from core.exceptions import SerializationError
from etl.document_composer import EMBEDDING_TEXT_COLUMN, TITLE_COLUMN
from etl.tsv_parser import SOC_CODE_COLUMN

logger = logging.getLogger(__name__)

DOCUMENT_COLUMNS = [SOC_CODE_COLUMN, TITLE_COLUMN, EMBEDDING_TEXT_COLUMN]


def escape_field(value: Any) -> str:
    """Stringify a value, quoting it when it holds a comma, a quote or a newline."""
    text = str(value)
    if "," in text or '"' in text or "\n" in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def serialize_records(records: Sequence[Mapping[str, Any]]) -> str:
    """
    Serialize records to comma-delimited text.

    The header is the key order of the first record. An empty sequence yields
    an empty string.

    Args:
        records: Mappings sharing the first record's keys

    Returns:
        CSV text without a trailing newline

    Raises:
        SerializationError: If a record is not a mapping or lacks a header column
    """
    if not records:
        return ""

    first = records[0]
    if not isinstance(first, Mapping):
        raise SerializationError(f"Expected mapping records, got {type(first).__name__}")

    headers = list(first.keys())
    lines = [",".join(headers)]

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            raise SerializationError(f"Record {index} is {type(record).__name__}, not a mapping")
        missing = [header for header in headers if header not in record]
        if missing:
            raise SerializationError(f"Record {index} is missing columns: {missing}")
        lines.append(",".join(escape_field(record[header]) for header in headers))

    return "\n".join(lines)


def read_documents_csv(path: Path) -> List[Dict[str, str]]:
    """
    Read the intermediate document file.

    Args:
        path: CSV written by the document preparation stage

    Returns:
        List of row dictionaries with string values, in file order
    """
    try:
        logger.info(f"Reading CSV from: {path}")
        df = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError:
        logger.warning(f"Document file {path} is empty")
        return []

    missing = [column for column in DOCUMENT_COLUMNS if column not in df.columns]
    if missing:
        raise SerializationError(f"Document file {path} is missing columns: {missing}")

    rows = df.to_dict(orient="records")
    logger.info(f"Successfully parsed {len(rows)} rows from CSV.")
    return rows
