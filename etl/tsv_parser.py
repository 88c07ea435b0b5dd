# WORKFLOW: Tab-delimited parser for O*NET text tables.
# Used by: Document preparation stage, source record loading
# Functions:
# 1. parse_tsv() - Turn raw TSV text into TsvRow records
# 2. split_line() - Split and trim one delimited line
#
# Parsing flow: Raw text -> Header -> Field count check -> Trimmed values -> TsvRow
# The first header column is always the SOC code, whatever its label says.

"""
Tab-delimited parser for O*NET text tables.
"""

import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from core.exceptions import MalformedRowError

logger = logging.getLogger(__name__)

SOC_CODE_COLUMN = "O*NET-SOC Code"
BAD_LINE_POLICIES = ("error", "skip")


class TsvRow(BaseModel):
    """One parsed data line keyed by SOC code."""
    soc_code: str = Field(..., description="Entity identifier from the first column")
    values: Dict[str, str] = Field(default_factory=dict, description="Remaining columns by header name")

    def get(self, column: str, default: str = "") -> str:
        if column == SOC_CODE_COLUMN:
            return self.soc_code
        return self.values.get(column, default)


def split_line(line: str, delimiter: str = "\t") -> List[str]:
    """Split a line on the delimiter and trim every field."""
    return [value.strip() for value in line.split(delimiter)]


def parse_tsv(text: str, on_bad_lines: str = "error", source_name: Optional[str] = None) -> List[TsvRow]:
    """
    Parse tab-delimited text into rows.

    Args:
        text: Raw file contents, header on the first line
        on_bad_lines: "error" to fail on a field count mismatch, "skip" to warn and drop the line
        source_name: File name used in warnings and errors

    Returns:
        List of TsvRow in file order
    """
    if on_bad_lines not in BAD_LINE_POLICIES:
        raise ValueError(f"Unknown bad line policy: {on_bad_lines}")

    lines = text.split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    first = 0
    while first < len(lines) and not lines[first].strip():
        first += 1
    if len(lines) - first < 2:
        return []

    headers = split_line(lines[first])
    headers[0] = SOC_CODE_COLUMN
    label = source_name or "input"

    rows = []
    for index, line in enumerate(lines[first + 1:], start=first + 2):
        values = split_line(line)

        if len(values) != len(headers):
            if on_bad_lines == "skip":
                logger.warning(
                    f"Skipping malformed line {index} in {label}: "
                    f"Expected {len(headers)} columns, but found {len(values)}."
                )
                continue
            raise MalformedRowError(index, len(headers), len(values), source_name)

        record = {header: (values[i] if i < len(values) else "") for i, header in enumerate(headers)}
        soc_code = record.pop(SOC_CODE_COLUMN)
        rows.append(TsvRow(soc_code=soc_code, values=record))

    logger.info(f"Parsed {len(rows)} rows from {label}")
    return rows
