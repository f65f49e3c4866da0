"""Integration tests: full CV backup export and reload."""

from datetime import datetime, timezone

import pytest

from vitae.contexts.records.backup import build_cv_export, cv_export_file_name
from vitae.contexts.records.store import RecordStore
from vitae.utils.json_tools import load_json_document, write_json_document

EXPORT_TIME = datetime(2025, 11, 14, 9, 30, tzinfo=timezone.utc)


@pytest.mark.integration
def test_backup_document_shape(seeded_store):
    document = build_cv_export(seeded_store.live_records(), exported_at=EXPORT_TIME)

    assert list(document) == ["_technicalGuide", "exportDate", "profile", "experiences", "education", "skills"]
    assert document["exportDate"] == "2025-11-14T09:30:00.000Z"
    assert [e["id"] for e in document["experiences"]] == ["e1", "e2"]
    assert document["education"][0]["field"] == "Computer Science"
    assert cv_export_file_name(EXPORT_TIME) == "cv-export-2025-11-14.json"


@pytest.mark.integration
def test_backup_reloads_into_fresh_store(seeded_store, tmp_path):
    """Test export then load reproduces every record with its id."""
    path = write_json_document(
        build_cv_export(seeded_store.live_records()), tmp_path / cv_export_file_name()
    )

    with RecordStore.initialize(tmp_path / "restored.db", user_id="user-a") as restored:
        counts = restored.load_document(load_json_document(path))

        assert counts == {"profile": 1, "experiences": 2, "education": 1, "skills": 3}
        assert restored.live_records() == seeded_store.live_records()


@pytest.mark.integration
def test_empty_store_backup(store):
    document = build_cv_export(store.live_records())

    assert document["profile"] is None
    assert document["experiences"] == document["education"] == document["skills"] == []
