"""
Pure projections over a guest snapshot: ordering, filtering and aggregates
"""

from collections import Counter
from enum import Enum
from typing import Iterable, List

from app.schemas.guest import GuestRecord, GuestSummary

ALL_CATEGORIES = "All"
UNCATEGORIZED = "Uncategorized"


class AttendanceFilter(str, Enum):
    ALL = "All"
    PRESENT = "Present"
    YET_TO_ATTEND = "YetToAttend"


def visible_guests(guests: Iterable[GuestRecord]) -> List[GuestRecord]:
    """Non-deleted guests ordered by id"""
    return sorted((g for g in guests if not g.deleted), key=lambda g: g.id)


def filter_guests(
    guests: Iterable[GuestRecord],
    category: str = ALL_CATEGORIES,
    attendance: AttendanceFilter = AttendanceFilter.ALL,
    search: str = "",
) -> List[GuestRecord]:
    results = visible_guests(guests)

    if category and category != ALL_CATEGORIES:
        results = [g for g in results if g.category == category]

    if attendance == AttendanceFilter.PRESENT:
        results = [g for g in results if g.attending]
    elif attendance == AttendanceFilter.YET_TO_ATTEND:
        results = [g for g in results if not g.attending]

    query = (search or "").strip().lower()
    if query:
        results = [g for g in results if query in g.name.lower()]

    return results


def summarize(guests: Iterable[GuestRecord]) -> GuestSummary:
    """Counts over the non-deleted guests, independent of any filter"""
    visible = visible_guests(guests)
    attending = sum(1 for g in visible if g.attending)
    return GuestSummary(
        total=len(visible),
        attending=attending,
        yet_to_attend=len(visible) - attending,
        gifts=sum(1 for g in visible if g.has_gift),
        food_coupons=sum(1 for g in visible if g.has_food_coupon),
        lanyards=sum(1 for g in visible if g.has_lanyard),
        categories=dict(Counter(g.category or UNCATEGORIZED for g in visible)),
    )
