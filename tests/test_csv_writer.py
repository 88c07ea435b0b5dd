"""Tests for the document CSV writer and its read-back."""

import pytest

from core.exceptions import SerializationError
from etl.csv_writer import DOCUMENT_COLUMNS, escape_field, read_documents_csv, serialize_records


def test_empty_input_serializes_to_empty_string():
    assert serialize_records([]) == ""


@pytest.mark.parametrize("value,expected", [
    ("plain text", "plain text"),
    ("a,b", '"a,b"'),
    ('say "hi"', '"say ""hi"""'),
    ("line1\nline2", '"line1\nline2"'),
    (42, "42"),
    ("", ""),
])
def test_escape_field(value, expected):
    assert escape_field(value) == expected


def test_header_follows_first_record_key_order():
    records = [
        {"b": "1", "a": "2"},
        {"a": "4", "b": "3"},
    ]

    assert serialize_records(records) == "b,a\n1,2\n3,4"


def test_non_mapping_record_is_rejected():
    with pytest.raises(SerializationError):
        serialize_records([["15-1111.00", "Title"]])

    with pytest.raises(SerializationError):
        serialize_records([{"a": "1"}, "not a record"])


def test_record_missing_a_header_column_is_rejected():
    with pytest.raises(SerializationError):
        serialize_records([{"a": "1", "b": "2"}, {"a": "3"}])


def test_round_trip_preserves_special_characters(tmp_path):
    records = [
        {
            "O*NET-SOC Code": "15-1111.00",
            "Title": "Computer and Information Research Scientists",
            "embedding_text": 'Official Title: Scientists\nDescription: Research, "theory" and design\n\nKey Tasks:\n- Analyze',
        },
        {
            "O*NET-SOC Code": "11-1011.00",
            "Title": 'Chief Executives, "CEO"',
            "embedding_text": "Official Title: Chief Executives",
        },
    ]
    path = tmp_path / "documents.csv"
    path.write_text(serialize_records(records), encoding="utf-8")

    rows = read_documents_csv(path)

    assert rows == records


def test_read_back_rejects_missing_columns(tmp_path):
    path = tmp_path / "documents.csv"
    path.write_text("O*NET-SOC Code,Title\n15-1111.00,Scientists", encoding="utf-8")

    with pytest.raises(SerializationError):
        read_documents_csv(path)


def test_read_back_of_empty_file(tmp_path):
    path = tmp_path / "documents.csv"
    path.write_text("", encoding="utf-8")

    assert read_documents_csv(path) == []


def test_document_columns():
    assert DOCUMENT_COLUMNS == ["O*NET-SOC Code", "Title", "embedding_text"]
