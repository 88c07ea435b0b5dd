# WORKFLOW: Compose one embedding document per occupation.
# Used by: Document preparation stage
# Functions:
# 1. compose_occupation() - Left-join aggregates onto a base occupation
# 2. create_embedding_text() - Render the canonical embedding text
# 3. compose_documents() - Compose every occupation of the base table
#
# Compose flow: Occupation + Aggregates -> OccupationDocument -> Output row
# The embedding text layout is fixed; downstream vectors depend on it.

"""
Occupation document composition and embedding text rendering.
"""

import logging
from typing import Dict, Iterable, List

from pydantic import BaseModel, ConfigDict, Field

from etl.aggregation import OccupationAggregates
from etl.sources import Occupation
from etl.tsv_parser import SOC_CODE_COLUMN

logger = logging.getLogger(__name__)

MAX_TASKS = 10
TITLE_COLUMN = "Title"
EMBEDDING_TEXT_COLUMN = "embedding_text"


class OccupationDocument(BaseModel):
    """Denormalized occupation with its rendered embedding text."""
    model_config = ConfigDict(frozen=True)

    soc_code: str
    title: str
    description: str
    all_titles: List[str] = Field(default_factory=list)
    tasks: List[str] = Field(default_factory=list)
    knowledge: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    embedding_text: str = ""

    def to_output_row(self) -> Dict[str, str]:
        """Columns written to the intermediate document file."""
        return {
            SOC_CODE_COLUMN: self.soc_code,
            TITLE_COLUMN: self.title,
            EMBEDDING_TEXT_COLUMN: self.embedding_text,
        }


def create_embedding_text(
    title: str,
    description: str,
    all_titles: List[str],
    tasks: List[str],
    skills: List[str],
    knowledge: List[str],
    technologies: List[str],
) -> str:
    """
    Render the canonical embedding text for one occupation.

    Sections other than title and description are emitted only when their
    list is non-empty. Only the first MAX_TASKS tasks are listed.
    """
    text = f"Official Title: {title}\n"
    text += f"Description: {description}\n\n"
    if all_titles:
        text += f"Alternate and Reported Titles: {', '.join(all_titles)}\n\n"
    if tasks:
        text += "Key Tasks:\n" + "".join(f"- {task}\n" for task in tasks[:MAX_TASKS])
    if skills:
        text += f"\nKey Skills: {', '.join(skills)}\n"
    if knowledge:
        text += f"Required Knowledge: {', '.join(knowledge)}\n"
    if technologies:
        text += f"\nTechnologies and Software Used: {', '.join(technologies)}\n"
    return text.strip()


def compose_occupation(occupation: Occupation, aggregates: OccupationAggregates) -> OccupationDocument:
    """
    Merge aggregated values into a base occupation.

    Args:
        occupation: Row from the occupation base table
        aggregates: Aggregated field maps keyed by SOC code

    Returns:
        OccupationDocument; fields without aggregated values are empty lists
    """
    soc = occupation.soc_code
    fields = {
        "all_titles": list(aggregates.titles.get(soc, [])),
        "tasks": list(aggregates.tasks.get(soc, [])),
        "knowledge": list(aggregates.knowledge.get(soc, [])),
        "skills": list(aggregates.skills.get(soc, [])),
        "technologies": list(aggregates.technologies.get(soc, [])),
    }
    embedding_text = create_embedding_text(occupation.title, occupation.description, **fields)

    return OccupationDocument(
        soc_code=soc,
        title=occupation.title,
        description=occupation.description,
        embedding_text=embedding_text,
        **fields,
    )


def compose_documents(occupations: Iterable[Occupation], aggregates: OccupationAggregates) -> List[OccupationDocument]:
    """Compose one document per base occupation, keeping base table order."""
    documents = [compose_occupation(occupation, aggregates) for occupation in occupations]
    logger.info(f"Composed {len(documents)} occupation documents")
    return documents
