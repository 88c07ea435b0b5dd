# WORKFLOW: Typed source records for the O*NET text tables.
# Used by: Document preparation stage, aggregation
# Records:
# 1. Occupation - Base table (SOC code, title, description)
# 2. AlternateTitle / ReportedTitle - Title sources, both exposed as `title`
# 3. TaskStatement - Task Statements and Emerging Tasks
# 4. KnowledgeElement / SkillElement - Element name per occupation
# 5. TechnologySkill - Example software with its commodity title
#
# Loading flow: Source directory -> Required file check -> parse_tsv() -> Typed records

"""
Typed source records and file registry for the O*NET text tables.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from core.exceptions import MissingInputError
from etl.tsv_parser import SOC_CODE_COLUMN, TsvRow, parse_tsv

logger = logging.getLogger(__name__)

OCCUPATION_DATA = "Occupation Data.txt"
ALTERNATE_TITLES = "Alternate Titles.txt"
REPORTED_TITLES = "Sample of Reported Titles.txt"
TASK_STATEMENTS = "Task Statements.txt"
EMERGING_TASKS = "Emerging Tasks.txt"
KNOWLEDGE = "Knowledge.txt"
SKILLS = "Skills.txt"
TECHNOLOGY_SKILLS = "Technology Skills.txt"

REQUIRED_FILES = [
    OCCUPATION_DATA, ALTERNATE_TITLES, REPORTED_TITLES,
    TASK_STATEMENTS, EMERGING_TASKS, KNOWLEDGE, SKILLS,
    TECHNOLOGY_SKILLS,
]


class SourceRecord(BaseModel):
    """Base for all per-table records; SOC code is always present."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    soc_code: str = Field(..., alias=SOC_CODE_COLUMN)

    @classmethod
    def from_row(cls, row: TsvRow) -> "SourceRecord":
        data = {SOC_CODE_COLUMN: row.soc_code}
        for name, field in cls.model_fields.items():
            if field.alias and field.alias != SOC_CODE_COLUMN:
                data[field.alias] = row.get(field.alias)
        return cls.model_validate(data)


class Occupation(SourceRecord):
    title: str = Field("", alias="Title")
    description: str = Field("", alias="Description")


class AlternateTitle(SourceRecord):
    title: str = Field("", alias="Alternate Title")


class ReportedTitle(SourceRecord):
    title: str = Field("", alias="Reported Job Title")


class TaskStatement(SourceRecord):
    task: str = Field("", alias="Task")


class KnowledgeElement(SourceRecord):
    element_name: str = Field("", alias="Element Name")


class SkillElement(SourceRecord):
    element_name: str = Field("", alias="Element Name")


class TechnologySkill(SourceRecord):
    example: str = Field("", alias="Example")
    commodity_title: str = Field("", alias="Commodity Title")

    @property
    def label(self) -> str:
        return f"{self.example} ({self.commodity_title})"


RecordT = TypeVar("RecordT", bound=SourceRecord)


def to_records(rows: Iterable[TsvRow], model: Type[RecordT]) -> List[RecordT]:
    """Convert parsed rows into typed records of one source table."""
    return [model.from_row(row) for row in rows]


def find_missing_files(source_dir: Path, file_names: Iterable[str] = REQUIRED_FILES) -> List[str]:
    """Return the required file names that do not exist in source_dir."""
    return [name for name in file_names if not (Path(source_dir) / name).exists()]


def check_required_files(source_dir: Path) -> None:
    """
    Fail before any processing if a required source file is absent.

    Args:
        source_dir: Directory holding the O*NET text files

    Raises:
        MissingInputError: If one or more files are missing
    """
    missing = find_missing_files(source_dir)
    if missing:
        raise MissingInputError(missing, str(source_dir))
    logger.info(f"All {len(REQUIRED_FILES)} required files present in {source_dir}")


def load_tables(source_dir: Path, skip_malformed_files: Iterable[str]) -> Dict[str, List[TsvRow]]:
    """
    Read and parse every required table.

    Args:
        source_dir: Directory holding the O*NET text files
        skip_malformed_files: File names whose malformed lines are skipped instead of failing

    Returns:
        Dictionary mapping file name to its parsed rows
    """
    tolerant = set(skip_malformed_files)
    tables = {}
    for name in REQUIRED_FILES:
        text = (Path(source_dir) / name).read_text(encoding="utf-8")
        policy = "skip" if name in tolerant else "error"
        tables[name] = parse_tsv(text, on_bad_lines=policy, source_name=name)
    return tables
