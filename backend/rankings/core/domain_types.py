"""Domain Types — enums and identity types shared by the ranking core.

Invariants:
    - Every ranking dimension (year, discipline, gender, age category) is a closed set
    - Year.ALL (0) is the wildcard year; any other int is a concrete season
    - CONTEST_TYPES_BY_SIZE lists contest types most prestigious first

Design Decisions:
    - str Enums: serialize to JSON and DB columns without custom encoders
    - Year kept as int (not Enum): seasons are open-ended, only the wildcard is named
"""

from enum import Enum, IntEnum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

AthleteId = NewType("AthleteId", str)
ContestId = NewType("ContestId", str)


# ─── Enums ───────────────────────────────────────────────────────

class RankingType(str, Enum):
    """Ranking policy — cumulative points or best-contests total."""
    POINT_SCORE = "point_score"
    TOP_SCORE = "top_score"


class Year(IntEnum):
    """Wildcard year bucket. Concrete seasons are plain ints."""
    ALL = 0


class DisciplineType(str, Enum):
    """How a discipline is contested — drives the Top-Score window."""
    COMPETITION = "competition"
    PERFORMANCE = "performance"
    GROUP = "group"


class Discipline(str, Enum):
    """Concrete disciplines, their groups, and the overall wildcard."""
    OVERALL = "overall"

    # Alpine skiing
    SKIING = "skiing"
    DOWNHILL = "downhill"
    SLALOM = "slalom"
    GIANT_SLALOM = "giant_slalom"
    SUPER_G = "super_g"

    # Freestyle
    FREESTYLE = "freestyle"
    MOGULS = "moguls"
    HALFPIPE = "halfpipe"
    SLOPESTYLE = "slopestyle"

    # Backcountry
    BACKCOUNTRY = "backcountry"
    FREERIDE = "freeride"
    SKI_TOURING = "ski_touring"


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    ALL = "all"


class AgeCategory(str, Enum):
    U16 = "u16"
    U20 = "u20"
    SENIOR = "senior"
    MASTER = "master"
    ALL = "all"


class ContestType(str, Enum):
    """Contest size/prestige classification."""
    WORLD_CHAMPIONSHIP = "world_championship"
    WORLD_CUP = "world_cup"
    CONTINENTAL_CUP = "continental_cup"
    NATIONAL_CHAMPIONSHIP = "national_championship"
    NATIONAL_CUP = "national_cup"
    OPEN = "open"


# Most prestigious first; index is the eligibility tie-break across types.
CONTEST_TYPES_BY_SIZE: tuple[ContestType, ...] = (
    ContestType.WORLD_CHAMPIONSHIP,
    ContestType.WORLD_CUP,
    ContestType.CONTINENTAL_CUP,
    ContestType.NATIONAL_CHAMPIONSHIP,
    ContestType.NATIONAL_CUP,
    ContestType.OPEN,
)


class RankingsUpdateReason(str, Enum):
    """Why a scoring event was emitted — decides the contest-count delta."""
    NEW_CONTEST = "new_contest"
    POINTS_CHANGED = "points_changed"
    DELETED_CONTEST = "deleted_contest"
