"""Shared fixtures: a small live record set and a throwaway record store."""

import pytest

from vitae.contexts.records.models import (
    Education,
    Experience,
    Language,
    LiveRecords,
    Profile,
    Skill,
)
from vitae.contexts.records.store import RecordStore


@pytest.fixture
def profile():
    return Profile(
        full_name="Jane Doe",
        title="Engineering Manager",
        email="jane@example.com",
        phone="+44 20 7946 0000",
        location="London",
        profile_summary="Builds teams that ship.",
        core_strengths=["Leadership", "  ", "Python"],
        languages=[Language("English", "Native"), Language("German", "B2")],
    )


@pytest.fixture
def live_records(profile):
    return LiveRecords(
        profile=profile,
        experiences=[
            Experience("Senior Developer", "Tech Corp", "2020-01", id="e1", is_current=True,
                       location="Remote", description="Led the platform team.\nShipped v2."),
            Experience("Developer", "Start Ltd", "2017-03", id="e2", end_date="2019-12"),
        ],
        education=[
            Education("MIT", "2012-09", id="d1", degree="BSc", field_of_study="Computer Science",
                      end_date="2016-06", location="Cambridge, MA"),
        ],
        skills=[
            Skill("Python", id="s1", category="Languages", proficiency="Expert"),
            Skill("Excel", id="s2"),
            Skill("SQL", id="s3", category="Tech"),
        ],
    )


@pytest.fixture
def store(tmp_path):
    store = RecordStore.initialize(tmp_path / "vitae.db", user_id="user-a")
    yield store
    store.close()


@pytest.fixture
def seeded_store(store, live_records):
    """Store holding live_records with their fixture ids."""
    store.upsert_profile(live_records.profile)
    for record in live_records.experiences + live_records.education + live_records.skills:
        store.create_record(record, keep_id=True)
    return store
