"""Cohort tables for pension relief and age relief (§§ 19, 24a EStG).

Both reliefs are frozen at the level of the year in which the pension
started (pension relief) or the year following the 64th birthday (age
relief). The tables are indexed by that year minus 2004, where index 1
stands for 2005 and earlier and index 54 for 2058 and later. They are the
same for every supported tax year.
"""

from decimal import Decimal
from typing import Tuple

REFERENCE_YEAR = 2004
FIRST_COHORT_YEAR = 2006


def _d(*values: str) -> Tuple[Decimal, ...]:
    return tuple(Decimal(v) for v in values)


# Pension relief: percentage of the pension base (TAB1)
PENSION_RELIEF_RATE = _d(
    "0", "0.4", "0.384", "0.368", "0.352", "0.336", "0.32", "0.304", "0.288",
    "0.272", "0.256", "0.24", "0.224", "0.208", "0.192", "0.176", "0.16",
    "0.152", "0.144", "0.14", "0.136", "0.132", "0.128", "0.124", "0.12",
    "0.116", "0.112", "0.108", "0.104", "0.1", "0.096", "0.092", "0.088",
    "0.084", "0.08", "0.076", "0.072", "0.068", "0.064", "0.06", "0.056",
    "0.052", "0.048", "0.044", "0.04", "0.036", "0.032", "0.028", "0.024",
    "0.02", "0.016", "0.012", "0.008", "0.004", "0",
)

# Pension relief: maximum amount in euros (TAB2)
PENSION_RELIEF_CAP = _d(
    "0", "3000", "2880", "2760", "2640", "2520", "2400", "2280", "2160",
    "2040", "1920", "1800", "1680", "1560", "1440", "1320", "1200", "1140",
    "1080", "1050", "1020", "990", "960", "930", "900", "870", "840", "810",
    "780", "750", "720", "690", "660", "630", "600", "570", "540", "510",
    "480", "450", "420", "390", "360", "330", "300", "270", "240", "210",
    "180", "150", "120", "90", "60", "30", "0",
)

# Pension relief: flat surcharge in euros (TAB3)
PENSION_SURCHARGE = _d(
    "0", "900", "864", "828", "792", "756", "720", "684", "648", "612",
    "576", "540", "504", "468", "432", "396", "360", "342", "324", "315",
    "306", "297", "288", "279", "270", "261", "252", "243", "234", "225",
    "216", "207", "198", "189", "180", "171", "162", "153", "144", "135",
    "126", "117", "108", "99", "90", "81", "72", "63", "54", "45", "36", "27",
    "18", "9", "0",
)

# Age relief: fraction of non-pension income (TAB4)
AGE_RELIEF_RATE = PENSION_RELIEF_RATE

# Age relief: maximum amount in euros (TAB5)
AGE_RELIEF_CAP = _d(
    "0", "1900", "1824", "1748", "1672", "1596", "1520", "1444", "1368",
    "1292", "1216", "1140", "1064", "988", "912", "836", "760", "722", "684",
    "665", "646", "627", "608", "589", "570", "551", "532", "513", "494",
    "475", "456", "437", "418", "399", "380", "361", "342", "323", "304",
    "285", "266", "247", "228", "209", "190", "171", "152", "133", "114",
    "95", "76", "57", "38", "19", "0",
)

MAX_INDEX = len(PENSION_RELIEF_RATE) - 1


def cohort_index(year: int) -> int:
    """Table index for a cohort year, clamped to ``1..MAX_INDEX``.

    Example:
        cohort_index(1999)  # -> 1
        cohort_index(2020)  # -> 16
        cohort_index(2100)  # -> 54
    """
    if year < FIRST_COHORT_YEAR:
        return 1
    return min(year - REFERENCE_YEAR, MAX_INDEX)
