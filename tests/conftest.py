"""Shared fixtures: a miniature O*NET release and a deterministic embedding model."""

from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pytest

DIMENSION = 8

ONET_TABLES: Dict[str, List[str]] = {
    "Occupation Data.txt": [
        "O*NET-SOC Code\tTitle\tDescription",
        "15-1111.00\tComputer and Information Research Scientists\tConduct research into fundamental computer and information science.",
        "11-1011.00\tChief Executives\tDetermine and formulate policies.",
    ],
    "Alternate Titles.txt": [
        "O*NET-SOC Code\tTitle\tAlternate Title\tShort Title\tSource(s)",
        "15-1111.00\tComputer and Information Research Scientists\tAI Scientist\tAIS\t08",
        "15-1111.00\tComputer and Information Research Scientists\tComputer Scientist\tCS\t08",
    ],
    "Sample of Reported Titles.txt": [
        "O*NET-SOC Code\tTitle\tReported Job Title\tShown in My Next Move",
        "15-1111.00\tComputer and Information Research Scientists\tResearch Scientist\tY",
        "15-1111.00\tComputer and Information Research Scientists\tComputer Scientist\tN",
    ],
    "Task Statements.txt": [
        "O*NET-SOC Code\tTitle\tTask ID\tTask\tTask Type",
        "15-1111.00\tComputer and Information Research Scientists\t3545\tAnalyze problems to develop solutions.\tCore",
        "15-1111.00\tComputer and Information Research Scientists\t3546\tDesign computers and software\tCore",
    ],
    "Emerging Tasks.txt": [
        "O*NET-SOC Code\tTitle\tTask\tCategory",
        "15-1111.00\tComputer and Information Research Scientists\tAnalyze problems to develop solutions\tRevision",
        "15-1111.00\tComputer and Information Research Scientists\tTrain machine learning models.\tNew",
    ],
    "Knowledge.txt": [
        "O*NET-SOC Code\tTitle\tElement ID\tElement Name\tScale ID\tData Value",
        "15-1111.00\tComputer and Information Research Scientists\t2.C.3.a\tComputers and Electronics\tIM\t4.8",
        "15-1111.00\tComputer and Information Research Scientists\t2.C.3.a\tComputers and Electronics\tLV\t6.1",
        "15-1111.00\tComputer and Information Research Scientists\t2.C.4.a\tMathematics\tIM\t4.2",
    ],
    "Skills.txt": [
        "O*NET-SOC Code\tTitle\tElement ID\tElement Name\tScale ID\tData Value",
        "15-1111.00\tComputer and Information Research Scientists\t2.A.1.a\tReading Comprehension\tIM\t4.0",
        "15-1111.00\tComputer and Information Research Scientists\t2.B.3.e\tProgramming\tIM\t4.5",
    ],
    "Technology Skills.txt": [
        "O*NET-SOC Code\tTitle\tExample\tCommodity Code\tCommodity Title\tHot Technology",
        "15-1111.00\tComputer and Information Research Scientists\tPython\t43232403\tDevelopment environment software\tY",
        "15-1111.00\tComputer and Information Research Scientists\tGit\t43232402\tConfiguration management software\tY",
    ],
}


def write_onet_tables(directory: Path, overrides: Optional[Dict[str, List[str]]] = None,
                      omit: Optional[List[str]] = None) -> Path:
    """Write the miniature O*NET tables into directory."""
    tables = dict(ONET_TABLES)
    tables.update(overrides or {})
    directory.mkdir(parents=True, exist_ok=True)
    for name, lines in tables.items():
        if omit and name in omit:
            continue
        (directory / name).write_text("\n".join(lines) + "\n", encoding="utf-8")
    return directory


class DummyEmbeddingModel:
    """Deterministic embeddings derived from each text, one call log entry per batch."""

    def __init__(self):
        self.calls = []

    def encode(self, texts):
        self.calls.append(list(texts))
        vectors = np.zeros((len(texts), DIMENSION))
        for i, text in enumerate(texts):
            vectors[i, len(text) % DIMENSION] = 1.0
        return vectors


@pytest.fixture
def onet_dir(tmp_path):
    return write_onet_tables(tmp_path / "db_25_0_text")


@pytest.fixture
def dummy_model():
    return DummyEmbeddingModel()
