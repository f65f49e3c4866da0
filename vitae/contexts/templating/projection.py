"""
Template projection: resolve a template's ID selections into CV content.
"""

import dataclasses
from typing import List, Sequence, TypeVar

from vitae.contexts.records.models import CVProjection, LiveRecords, TemplateInput
from vitae.contexts.templating.logger import _log_debug

R = TypeVar("R")


def _select(records: Sequence[R], selected_ids: List[str]) -> List[R]:
    # Store order wins over selection order; ids without a live record drop out
    wanted = set(selected_ids)
    return [record for record in records if record.id in wanted]


def resolve_projection(template: TemplateInput, records: LiveRecords) -> CVProjection:
    """
    Build the projection a template renders to.

    Dangling references resolve to nothing. The profile is dropped when
    include_profile is False; its languages are cleared when
    include_languages is False (the live profile is not modified).
    """
    profile = records.profile if template.include_profile else None
    if profile is not None and not template.include_languages:
        profile = dataclasses.replace(profile, languages=[])

    projection = CVProjection(
        profile=profile,
        experiences=_select(records.experiences, template.selected_experience_ids),
        education=_select(records.education, template.selected_education_ids),
        skills=_select(records.skills, template.selected_skill_ids),
    )

    _log_debug(
        f"Resolved '{template.name}': {len(projection.experiences)} experiences, "
        f"{len(projection.education)} education, {len(projection.skills)} skills"
    )
    return projection


def full_projection(records: LiveRecords) -> CVProjection:
    """Projection of every live record (the "no template" view)."""
    return CVProjection(
        profile=records.profile,
        experiences=list(records.experiences),
        education=list(records.education),
        skills=list(records.skills),
    )
