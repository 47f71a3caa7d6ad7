"""Combination Generator — fans one scoring event out into every bucket it touches.

Invariants:
    - Result is the Cartesian product of {value} + ancestors(value) per dimension
    - No combination has a None dimension
    - Size == (1 + dy) * (1 + dd) * (1 + dg) * (1 + da) when every input is defined
    - No duplicates: each dimension's own chain is duplicate-free

Design Decisions:
    - itertools.product over nested loops: the four dimensions read as one expression
    - Returns a list, order unspecified: callers rely on bucket identity only
"""

from itertools import product

from rankings.core.category_hierarchy import (
    age_category_ancestors, discipline_ancestors, gender_ancestors,
    year_ancestors,
)
from rankings.core.domain_types import AgeCategory, Discipline, Gender
from rankings.core.entities import RankingCombination


def generate_combinations(
    year: int | None,
    discipline: Discipline | None,
    gender: Gender | None,
    age_category: AgeCategory | None,
) -> list[RankingCombination]:
    """Every (year, discipline, gender, age category) bucket for one event."""
    years = (year, *year_ancestors(year))
    disciplines = (discipline, *discipline_ancestors(discipline))
    genders = (gender, *gender_ancestors(gender))
    age_categories = (age_category, *age_category_ancestors(age_category))

    return [
        RankingCombination(year=y, discipline=d, gender=g, age_category=a)
        for y, d, g, a in product(years, disciplines, genders, age_categories)
        if y is not None and d is not None and g is not None and a is not None
    ]
