"""Amount and date tolerance checks shared by the single and multi matchers."""
from dataclasses import dataclass
from datetime import datetime

from automatch.models.matching import MatchingConfig

SECONDS_PER_DAY = 24 * 60 * 60


@dataclass(frozen=True)
class AmountMatch:
    exact: bool
    close: bool
    variance: float


@dataclass(frozen=True)
class DateMatch:
    exact: bool
    close: bool
    variance_days: float


def amount_match(amount1: float, amount2: float, config: MatchingConfig) -> AmountMatch:
    """
    Compare two amounts against the fixed and percentage tolerances.

    ``close`` holds when either tolerance is satisfied; ``exact`` only when
    the absolute difference is under the fixed tolerance.
    """
    variance = abs(amount1 - amount2)
    largest = max(amount1, amount2)

    if amount1 == 0 and amount2 == 0:
        return AmountMatch(exact=True, close=True, variance=0.0)

    if largest > 0:
        percent_variance = variance / largest
    else:
        percent_variance = float("inf")

    exact = variance < config.amount_tolerance_fixed
    close = exact or percent_variance < config.amount_tolerance_percent

    return AmountMatch(exact=exact, close=close, variance=variance)


def date_match(date1: datetime, date2: datetime, config: MatchingConfig) -> DateMatch:
    variance_days = abs((date1 - date2).total_seconds()) / SECONDS_PER_DAY

    return DateMatch(
        exact=variance_days < 1,
        close=variance_days <= config.date_tolerance_days,
        variance_days=variance_days,
    )
