# WORKFLOW: Aggregate one-to-many O*NET tables into per-occupation value lists.
# Used by: Document preparation stage
# Functions:
# 1. aggregate_by_soc() - Group one field by SOC code, deduplicated in first-seen order
# 2. strip_trailing_period() - Normalize task statements before aggregation
# 3. build_aggregates() - Run every aggregation needed by the document composer
#
# Aggregation flow: Typed records -> Pre-concatenation -> Ordered set per SOC -> Lists

"""
Aggregation of repeated per-occupation values.
"""

import logging
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field

from etl.sources import (
    ALTERNATE_TITLES, EMERGING_TASKS, KNOWLEDGE, REPORTED_TITLES, SKILLS,
    TASK_STATEMENTS, TECHNOLOGY_SKILLS, AlternateTitle, KnowledgeElement,
    ReportedTitle, SkillElement, TaskStatement, TechnologySkill, to_records,
)
from etl.tsv_parser import TsvRow

logger = logging.getLogger(__name__)


class OccupationAggregates(BaseModel):
    """Aggregated field maps keyed by SOC code."""
    titles: Dict[str, List[str]] = Field(default_factory=dict)
    tasks: Dict[str, List[str]] = Field(default_factory=dict)
    knowledge: Dict[str, List[str]] = Field(default_factory=dict)
    skills: Dict[str, List[str]] = Field(default_factory=dict)
    technologies: Dict[str, List[str]] = Field(default_factory=dict)


def aggregate_by_soc(records: Iterable[Any], value_field: str) -> Dict[str, List[str]]:
    """
    Group the values of one field by SOC code.

    Records with an empty SOC code or an empty value are skipped. Each SOC code
    keeps its distinct values in the order they were first seen; codes without
    any value do not appear in the result.

    Args:
        records: Objects exposing `soc_code` and the value attribute
        value_field: Attribute holding the value to collect

    Returns:
        Dictionary mapping SOC code to its distinct values
    """
    groups: Dict[str, Dict[str, None]] = {}
    for record in records:
        soc_code = record.soc_code
        value = getattr(record, value_field)
        if not soc_code or not value:
            continue
        groups.setdefault(soc_code, {})[value] = None

    return {soc_code: list(values) for soc_code, values in groups.items()}


def strip_trailing_period(text: str) -> str:
    """Remove a single trailing period."""
    return text[:-1] if text.endswith(".") else text


def normalize_tasks(tasks: Iterable[TaskStatement]) -> List[TaskStatement]:
    return [t.model_copy(update={"task": strip_trailing_period(t.task)}) for t in tasks]


def build_aggregates(tables: Dict[str, List[TsvRow]]) -> OccupationAggregates:
    """
    Build every aggregated field map from the parsed tables.

    Args:
        tables: Parsed rows keyed by source file name

    Returns:
        OccupationAggregates with titles, tasks, knowledge, skills and technologies
    """
    try:
        all_titles = (
            to_records(tables[ALTERNATE_TITLES], AlternateTitle)
            + to_records(tables[REPORTED_TITLES], ReportedTitle)
        )
        all_tasks = normalize_tasks(
            to_records(tables[TASK_STATEMENTS], TaskStatement)
            + to_records(tables[EMERGING_TASKS], TaskStatement)
        )

        aggregates = OccupationAggregates(
            titles=aggregate_by_soc(all_titles, "title"),
            tasks=aggregate_by_soc(all_tasks, "task"),
            knowledge=aggregate_by_soc(to_records(tables[KNOWLEDGE], KnowledgeElement), "element_name"),
            skills=aggregate_by_soc(to_records(tables[SKILLS], SkillElement), "element_name"),
            technologies=aggregate_by_soc(to_records(tables[TECHNOLOGY_SKILLS], TechnologySkill), "label"),
        )

        logger.info(
            f"Aggregated titles for {len(aggregates.titles)}, tasks for {len(aggregates.tasks)}, "
            f"knowledge for {len(aggregates.knowledge)}, skills for {len(aggregates.skills)} "
            f"and technologies for {len(aggregates.technologies)} occupations"
        )
        return aggregates

    except Exception as e:
        logger.error(f"Failed to aggregate source tables: {e}")
        raise
