"""ORM Models — SQLAlchemy declarative models backing the ranking store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Enum-valued columns store the enum's string value

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from rankings.models.athlete import Athlete  # noqa: F401
from rankings.models.contest import Contest  # noqa: F401
from rankings.models.athlete_contest import AthleteContest  # noqa: F401
from rankings.models.athlete_ranking import AthleteRanking  # noqa: F401
