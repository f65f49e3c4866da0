"""Unit tests for tolerant JSON helpers and atomic writes."""

import json

import pytest

from vitae.utils.exceptions import MalformedDocumentError
from vitae.utils.json_tools import (
    coerce_json_list,
    decode_json,
    load_json_document,
    write_json_document,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [
        ('["a", "b"]', ["a", "b"]),
        (["a"], ["a"]),
        ("not json", []),
        ('{"a": 1}', []),
        (None, []),
        (42, []),
    ],
)
def test_coerce_json_list(value, expected):
    """Test list coercion never raises and only yields lists."""
    assert coerce_json_list(value) == expected


@pytest.mark.unit
def test_decode_json_undecodable_is_none():
    assert decode_json("{oops") is None
    assert decode_json(b'{"a": 1}') == {"a": 1}
    assert decode_json(3) is None


@pytest.mark.unit
def test_decode_json_default_tells_null_apart():
    missing = object()

    assert decode_json("null", default=missing) is None
    assert decode_json("{oops", default=missing) is missing
    assert decode_json(None, default=missing) is missing


@pytest.mark.unit
def test_load_json_document_malformed(tmp_path):
    """Test that undecodable files raise MalformedDocumentError with context."""
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(MalformedDocumentError) as exc_info:
        load_json_document(path)

    assert exc_info.value.source_path == path
    assert "not valid JSON" in str(exc_info.value)


@pytest.mark.unit
def test_load_json_document_missing_file(tmp_path):
    with pytest.raises(MalformedDocumentError):
        load_json_document(tmp_path / "absent.json")


@pytest.mark.unit
def test_write_json_document_leaves_no_temp_files(tmp_path):
    """Test atomic write produces only the target file."""
    target = tmp_path / "out" / "doc.json"
    write_json_document({"name": "Zoë"}, target)

    assert json.loads(target.read_text(encoding="utf-8")) == {"name": "Zoë"}
    assert [p.name for p in target.parent.iterdir()] == ["doc.json"]
