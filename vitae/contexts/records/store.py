"""
Persistent SQLite store for CV records and templates.

Every row is owned by exactly one user; a RecordStore instance is bound to a
single user id and never reads or writes rows owned by anyone else. Record
payloads are stored as camelCase JSON (the same shape as the exports), so the
schema stays stable while the record dataclasses evolve.
"""

import dataclasses
import json
import os
import sqlite3
import uuid
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from dotenv import load_dotenv

from vitae.contexts.records.logger import _log_debug, _log_info
from vitae.contexts.records.models import (
    CVProjection,
    Education,
    Experience,
    LiveRecords,
    Profile,
    Skill,
    Template,
    TemplateInput,
    sort_by_display_order,
)
from vitae.utils.exceptions import InvalidRecordError, RecordNotFoundError
from vitae.utils.json_tools import as_record
from vitae.utils.timestamp import now_exact

load_dotenv()
VITAE_DB_PATH = Path(os.getenv("VITAE_DB_PATH", "data/vitae.db"))
VITAE_USER_ID = os.getenv("VITAE_USER_ID", "local")

RECORD_TYPES = {
    "profile": Profile,
    "experience": Experience,
    "education": Education,
    "skill": Skill,
}

# Fields that must be non-empty strings on write, per record kind
REQUIRED_FIELDS = {
    "profile": ("full_name",),
    "experience": ("job_title", "company", "start_date"),
    "education": ("school", "start_date"),
    "skill": ("skill_name",),
    "template": ("name",),
}

MEMORY = ":memory:"

Record = Union[Experience, Education, Skill]


def kind_of(record: Any) -> str:
    """Map a record instance to its kind name ("experience", ...)."""
    for kind, record_type in RECORD_TYPES.items():
        if type(record) is record_type:
            return kind
    raise TypeError(f"Not a CV record: {type(record).__name__}")


def _validate(kind: str, record: Any) -> None:
    for field_name in REQUIRED_FIELDS[kind]:
        value = getattr(record, field_name)
        if not isinstance(value, str) or not value.strip():
            raise InvalidRecordError(kind, field_name)


class RecordStore:
    """
    SQLite-backed record and template store for one user.

    Open an existing database by instantiating with its path; create one with
    RecordStore.initialize(). ":memory:" databases are always initialized.

    Example:
        >>> store = RecordStore.initialize(Path("data/vitae.db"), user_id="local")
        >>> exp = store.create_record(Experience("PM", "Acme", "2020-01", is_current=True))
        >>> store.live_records().experiences[0].id == exp.id
        True
    """

    def __init__(self, db_path: Union[str, Path], user_id: str, create: bool = False):
        """
        Load an existing database from disk.

        Args:
            db_path: Path to SQLite database file (or ":memory:")
            user_id: Owner of every row this instance reads or writes
            create: Create the schema if missing

        Raises:
            FileNotFoundError: If the database file doesn't exist and create is False
        """
        in_memory = str(db_path) == MEMORY
        self.db_path = db_path if in_memory else Path(db_path)
        self.user_id = user_id

        if not in_memory:
            if not self.db_path.exists() and not create:
                raise FileNotFoundError(
                    f"Database not found: {self.db_path}\n"
                    f"To create a new database, use RecordStore.initialize()"
                )
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row  # Enable column access by name

        if create or in_memory:
            self._create_schema()

    @classmethod
    def initialize(cls, db_path: Union[str, Path], user_id: str) -> "RecordStore":
        """Open a database, creating file and schema if needed (never deletes data)."""
        return cls(db_path, user_id, create=True)

    @classmethod
    def from_env(cls, create: bool = False) -> "RecordStore":
        """Open the store configured by VITAE_DB_PATH / VITAE_USER_ID."""
        return cls(VITAE_DB_PATH, VITAE_USER_ID, create=create)

    def _create_schema(self) -> None:
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS records (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                kind TEXT NOT NULL,
                payload TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )
        self.conn.execute(
            """
            CREATE TABLE IF NOT EXISTS templates (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                name TEXT NOT NULL,
                description TEXT,
                selected_experience_ids TEXT NOT NULL,
                selected_education_ids TEXT NOT NULL,
                selected_skill_ids TEXT NOT NULL,
                include_profile INTEGER NOT NULL,
                include_languages INTEGER NOT NULL,
                is_default INTEGER NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
        """
        )
        self.conn.execute("CREATE INDEX IF NOT EXISTS idx_records_owner ON records(user_id, kind)")
        self.conn.execute("CREATE INDEX IF NOT EXISTS idx_templates_owner ON templates(user_id)")
        self.conn.commit()

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "RecordStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Low-level row access
    # ------------------------------------------------------------------

    def query(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """Execute SQL query and return results as list of dicts."""
        cursor = self.conn.execute(sql, params)
        return [dict(row) for row in cursor.fetchall()]

    def _record_rows(self, kind: str) -> List[Dict[str, Any]]:
        return self.query(
            "SELECT * FROM records WHERE user_id = ? AND kind = ? ORDER BY rowid",
            (self.user_id, kind),
        )

    def _row_to_record(self, kind: str, row: Dict[str, Any]):
        record = RECORD_TYPES[kind].from_dict(json.loads(row["payload"]))
        record.id = row["id"]
        record.user_id = row["user_id"]
        return record

    def _id_taken(self, record_id: str) -> bool:
        rows = self.query(
            "SELECT id FROM records WHERE id = ? UNION SELECT id FROM templates WHERE id = ?",
            (record_id, record_id),
        )
        return bool(rows)

    def _new_id(self, preferred: Optional[str] = None) -> str:
        if preferred and not self._id_taken(preferred):
            return preferred
        return str(uuid.uuid4())

    def _write_record(self, kind: str, record, created: bool) -> None:
        payload = json.dumps(record.to_dict(), ensure_ascii=False)
        timestamp = now_exact()
        if created:
            self.conn.execute(
                "INSERT INTO records (id, user_id, kind, payload, created_at, updated_at) VALUES (?, ?, ?, ?, ?, ?)",
                (record.id, self.user_id, kind, payload, timestamp, timestamp),
            )
        else:
            self.conn.execute(
                "UPDATE records SET payload = ?, updated_at = ? WHERE id = ? AND user_id = ?",
                (payload, timestamp, record.id, self.user_id),
            )
        self.conn.commit()

    # ------------------------------------------------------------------
    # Profile (upsert only)
    # ------------------------------------------------------------------

    def get_profile(self) -> Optional[Profile]:
        rows = self._record_rows("profile")
        return self._row_to_record("profile", rows[0]) if rows else None

    def upsert_profile(self, profile: Profile) -> Profile:
        """
        Create or replace the user's single profile.

        Raises:
            InvalidRecordError: If full_name is empty
        """
        _validate("profile", profile)
        existing = self.get_profile()
        profile = dataclasses.replace(profile, user_id=self.user_id)

        if existing is None:
            profile.id = self._new_id(profile.id)
            self._write_record("profile", profile, created=True)
            _log_debug(f"Created profile for {profile.full_name}")
        else:
            profile.id = existing.id
            self._write_record("profile", profile, created=False)
            _log_debug(f"Updated profile for {profile.full_name}")
        return profile

    # ------------------------------------------------------------------
    # Experience / education / skill
    # ------------------------------------------------------------------

    def list_records(self, kind: str) -> List[Record]:
        """All records of a kind, in display order."""
        records = [self._row_to_record(kind, row) for row in self._record_rows(kind)]
        return sort_by_display_order(records)

    def get_record(self, kind: str, record_id: str) -> Record:
        """
        Raises:
            RecordNotFoundError: If no such record is owned by this user
        """
        rows = self.query(
            "SELECT * FROM records WHERE id = ? AND user_id = ? AND kind = ?",
            (record_id, self.user_id, kind),
        )
        if not rows:
            raise RecordNotFoundError(kind, record_id)
        return self._row_to_record(kind, rows[0])

    def create_record(self, record: Record, keep_id: bool = False) -> Record:
        """
        Insert a new experience, education or skill.

        Args:
            record: Record to insert (its id is ignored unless keep_id)
            keep_id: Reuse record.id when it is free (used when seeding from exports)

        Returns:
            Stored copy with id and owner filled in
        """
        kind = kind_of(record)
        if kind == "profile":
            raise TypeError("Profiles are written with upsert_profile()")
        _validate(kind, record)

        stored = dataclasses.replace(record, user_id=self.user_id)
        stored.id = self._new_id(record.id if keep_id else None)
        self._write_record(kind, stored, created=True)
        _log_debug(f"Created {kind} {stored.id}")
        return stored

    def update_record(self, kind: str, record_id: str, **changes) -> Record:
        """
        Apply field changes to an existing record.

        Invariants are re-applied on the merged record (e.g., is_current=True
        clears end_date even when the change also supplies one).

        Raises:
            RecordNotFoundError: If no such record is owned by this user
            InvalidRecordError: If a required field would become empty
        """
        existing = self.get_record(kind, record_id)
        changes.pop("id", None)
        changes.pop("user_id", None)
        updated = dataclasses.replace(existing, **changes)
        _validate(kind, updated)
        self._write_record(kind, updated, created=False)
        _log_debug(f"Updated {kind} {record_id}: {sorted(changes)}")
        return updated

    def delete_record(self, kind: str, record_id: str) -> None:
        """
        Templates that reference the record keep the dangling id; it resolves
        to nothing at render/export time.
        """
        cursor = self.conn.execute(
            "DELETE FROM records WHERE id = ? AND user_id = ? AND kind = ?",
            (record_id, self.user_id, kind),
        )
        self.conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError(kind, record_id)
        _log_debug(f"Deleted {kind} {record_id}")

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def _row_to_template(self, row: Dict[str, Any]) -> Template:
        return Template(
            id=row["id"],
            user_id=row["user_id"],
            name=row["name"],
            description=row["description"],
            include_profile=bool(row["include_profile"]),
            include_languages=bool(row["include_languages"]),
            is_default=bool(row["is_default"]),
            selected_experience_ids=json.loads(row["selected_experience_ids"]),
            selected_education_ids=json.loads(row["selected_education_ids"]),
            selected_skill_ids=json.loads(row["selected_skill_ids"]),
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    @staticmethod
    def _template_columns(template: TemplateInput) -> tuple:
        return (
            template.name.strip(),
            template.description,
            json.dumps(template.selected_experience_ids),
            json.dumps(template.selected_education_ids),
            json.dumps(template.selected_skill_ids),
            int(template.include_profile),
            int(template.include_languages),
            int(template.is_default),
        )

    def list_templates(self) -> List[Template]:
        """Templates, newest first."""
        rows = self.query(
            "SELECT * FROM templates WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
            (self.user_id,),
        )
        return [self._row_to_template(row) for row in rows]

    def get_template(self, template_id: str) -> Template:
        rows = self.query(
            "SELECT * FROM templates WHERE id = ? AND user_id = ?", (template_id, self.user_id)
        )
        if not rows:
            raise RecordNotFoundError("template", template_id)
        return self._row_to_template(rows[0])

    def create_template(self, template: TemplateInput) -> Template:
        """
        Insert a template as one atomic write.

        Raises:
            InvalidRecordError: If the name is empty
        """
        _validate("template", template)
        template_id = self._new_id()
        timestamp = now_exact()
        self.conn.execute(
            """
            INSERT INTO templates (
                name, description,
                selected_experience_ids, selected_education_ids, selected_skill_ids,
                include_profile, include_languages, is_default,
                id, user_id, created_at, updated_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """,
            self._template_columns(template) + (template_id, self.user_id, timestamp, timestamp),
        )
        self.conn.commit()
        _log_info(f"Created template '{template.name}' ({template_id})")
        return self.get_template(template_id)

    def update_template(self, template_id: str, template: TemplateInput) -> Template:
        """
        Replace a template's name, flags and selections in one atomic write.

        Raises:
            RecordNotFoundError: If no such template is owned by this user
            InvalidRecordError: If the name is empty
        """
        _validate("template", template)
        cursor = self.conn.execute(
            """
            UPDATE templates SET
                name = ?, description = ?,
                selected_experience_ids = ?, selected_education_ids = ?, selected_skill_ids = ?,
                include_profile = ?, include_languages = ?, is_default = ?,
                updated_at = ?
            WHERE id = ? AND user_id = ?
            """,
            self._template_columns(template) + (now_exact(), template_id, self.user_id),
        )
        self.conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError("template", template_id)
        _log_info(f"Updated template '{template.name}' ({template_id})")
        return self.get_template(template_id)

    def delete_template(self, template_id: str) -> None:
        cursor = self.conn.execute(
            "DELETE FROM templates WHERE id = ? AND user_id = ?", (template_id, self.user_id)
        )
        self.conn.commit()
        if cursor.rowcount == 0:
            raise RecordNotFoundError("template", template_id)
        _log_info(f"Deleted template {template_id}")

    # ------------------------------------------------------------------
    # Read contract for the core
    # ------------------------------------------------------------------

    def live_records(self) -> LiveRecords:
        """Full current record set owned by this user, in display order."""
        return LiveRecords(
            profile=self.get_profile(),
            experiences=self.list_records("experience"),
            education=self.list_records("education"),
            skills=self.list_records("skill"),
        )

    def load_document(self, document: Any) -> Dict[str, int]:
        """
        Seed records from a CV JSON document.

        Accepts {profile, experiences, education, skills} at the top level or
        under "data" (AI exports). Record ids are kept when free so template
        exports that reference them still resolve. Entries missing required
        fields are skipped.

        Returns:
            Count of records written per kind
        """
        document = as_record(document)
        if not any(key in document for key in ("profile", "experiences", "education", "skills")):
            document = as_record(document.get("data"))

        projection = CVProjection.from_dict(document)
        counts = {"profile": 0, "experiences": 0, "education": 0, "skills": 0}

        if projection.profile is not None:
            try:
                self.upsert_profile(projection.profile)
                counts["profile"] = 1
            except InvalidRecordError as e:
                _log_info(f"Skipping profile: {e}")

        for key, records in (
            ("experiences", projection.experiences),
            ("education", projection.education),
            ("skills", projection.skills),
        ):
            for record in records:
                try:
                    self.create_record(record, keep_id=True)
                    counts[key] += 1
                except InvalidRecordError as e:
                    _log_info(f"Skipping {key} entry: {e}")

        return counts
