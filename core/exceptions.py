# WORKFLOW: Error taxonomy for the O*NET document pipeline.
# Used by: Parser, serializer, batch embedder, stage orchestration
# Errors:
# 1. MissingInputError - Required source table absent (checked before any reading)
# 2. MalformedRowError - Field count mismatch under the "error" line policy
# 3. EmbeddingBatchError - Embedding function failed for a batch
# 4. SerializationError - Records of unexpected shape passed to the CSV writer
#
# All of these abort the stage that raised them; nothing retries.

"""
Exceptions raised by the O*NET document pipeline.
"""

from typing import List, Optional


class OnetPipelineError(Exception):
    """Base class for all pipeline failures."""


class MissingInputError(OnetPipelineError):
    """One or more required source files do not exist."""

    def __init__(self, missing: List[str], source_dir: str):
        self.missing = list(missing)
        self.source_dir = str(source_dir)
        super().__init__(
            f"Missing required files in '{self.source_dir}': {', '.join(self.missing)}"
        )


class MalformedRowError(OnetPipelineError):
    """A data line does not have as many fields as the header."""

    def __init__(self, line_number: int, expected: int, actual: int, source_name: Optional[str] = None):
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        self.source_name = source_name
        location = f"{source_name}, line {line_number}" if source_name else f"line {line_number}"
        super().__init__(
            f"Malformed row at {location}: expected {expected} columns, but found {actual}"
        )


class EmbeddingBatchError(OnetPipelineError):
    """The embedding function failed for one batch."""

    def __init__(self, batch_number: int, start: int, end: int, reason: str):
        self.batch_number = batch_number
        self.start = start
        self.end = end
        self.reason = reason
        super().__init__(
            f"Embedding failed for batch {batch_number} (documents {start}-{end - 1}): {reason}"
        )


class SerializationError(OnetPipelineError):
    """Records handed to the serializer do not have the expected shape."""
