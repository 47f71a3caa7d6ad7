"""Category Hierarchy — parent lookups for the four ranking dimensions.

Invariants:
    - ancestors() returns the chain most specific first, excluding the value itself
    - Top-level and wildcard values (Year.ALL, Discipline.OVERALL, Gender.ALL,
      AgeCategory.ALL) have no ancestors
    - Every table is acyclic: each value has at most one parent

Design Decisions:
    - Adjacency maps (value -> parent) over ordered lists: adding a discipline
      is a one-line change and the chain is derived, never duplicated
    - Pure functions only: no IO, safe to call from any coroutine
"""

from typing import Hashable, Mapping

from rankings.core.domain_types import (
    AgeCategory, Discipline, DisciplineType, Gender, Year,
)


# ─── Hierarchy Tables ────────────────────────────────────────────

DISCIPLINE_PARENTS: Mapping[Discipline, Discipline] = {
    Discipline.SKIING: Discipline.OVERALL,
    Discipline.DOWNHILL: Discipline.SKIING,
    Discipline.SLALOM: Discipline.SKIING,
    Discipline.GIANT_SLALOM: Discipline.SKIING,
    Discipline.SUPER_G: Discipline.SKIING,
    Discipline.FREESTYLE: Discipline.OVERALL,
    Discipline.MOGULS: Discipline.FREESTYLE,
    Discipline.HALFPIPE: Discipline.FREESTYLE,
    Discipline.SLOPESTYLE: Discipline.FREESTYLE,
    Discipline.BACKCOUNTRY: Discipline.OVERALL,
    Discipline.FREERIDE: Discipline.BACKCOUNTRY,
    Discipline.SKI_TOURING: Discipline.BACKCOUNTRY,
}

GENDER_PARENTS: Mapping[Gender, Gender] = {
    Gender.MALE: Gender.ALL,
    Gender.FEMALE: Gender.ALL,
}

AGE_CATEGORY_PARENTS: Mapping[AgeCategory, AgeCategory] = {
    AgeCategory.U16: AgeCategory.ALL,
    AgeCategory.U20: AgeCategory.ALL,
    AgeCategory.SENIOR: AgeCategory.ALL,
    AgeCategory.MASTER: AgeCategory.ALL,
}

DISCIPLINE_TYPES: Mapping[Discipline, DisciplineType] = {
    Discipline.OVERALL: DisciplineType.GROUP,
    Discipline.SKIING: DisciplineType.GROUP,
    Discipline.DOWNHILL: DisciplineType.COMPETITION,
    Discipline.SLALOM: DisciplineType.COMPETITION,
    Discipline.GIANT_SLALOM: DisciplineType.COMPETITION,
    Discipline.SUPER_G: DisciplineType.COMPETITION,
    Discipline.FREESTYLE: DisciplineType.GROUP,
    Discipline.MOGULS: DisciplineType.COMPETITION,
    Discipline.HALFPIPE: DisciplineType.COMPETITION,
    Discipline.SLOPESTYLE: DisciplineType.COMPETITION,
    Discipline.BACKCOUNTRY: DisciplineType.GROUP,
    Discipline.FREERIDE: DisciplineType.COMPETITION,
    Discipline.SKI_TOURING: DisciplineType.PERFORMANCE,
}


# ─── Traversal ───────────────────────────────────────────────────

def _walk(value: Hashable, parents: Mapping) -> tuple:
    chain = []
    current = parents.get(value)
    while current is not None:
        chain.append(current)
        current = parents.get(current)
    return tuple(chain)


def year_ancestors(year: int | None) -> tuple[int, ...]:
    """Any concrete season rolls up into Year.ALL."""
    if year is None or year == Year.ALL:
        return ()
    return (Year.ALL,)


def discipline_ancestors(discipline: Discipline | None) -> tuple[Discipline, ...]:
    return _walk(discipline, DISCIPLINE_PARENTS)


def gender_ancestors(gender: Gender | None) -> tuple[Gender, ...]:
    return _walk(gender, GENDER_PARENTS)


def age_category_ancestors(
    age_category: AgeCategory | None,
) -> tuple[AgeCategory, ...]:
    return _walk(age_category, AGE_CATEGORY_PARENTS)


def discipline_type(discipline: Discipline) -> DisciplineType:
    """Contest format of a discipline; groups and OVERALL are GROUP."""
    return DISCIPLINE_TYPES.get(discipline, DisciplineType.GROUP)


def self_and_descendants(discipline: Discipline) -> tuple[Discipline, ...]:
    """The discipline plus every discipline that rolls up into it.

    Used to resolve a group discipline (e.g. SKIING, OVERALL) into the
    concrete disciplines whose contests it aggregates.
    """
    result = [discipline]
    for child in DISCIPLINE_PARENTS:
        if discipline in discipline_ancestors(child):
            result.append(child)
    return tuple(result)
