"""
Tests for guest list filtering and aggregate counts
"""

import pytest

from app.services.guest_views import AttendanceFilter, filter_guests, summarize, visible_guests

from conftest import make_guest

@pytest.fixture
def guests():
    return [
        make_guest("Zara Khan", category="VIP", attending=True, has_gift=True),
        make_guest("Adam Lee", category="Delegate", attending=False, has_food_coupon=True),
        make_guest("Maya Ito", category="Delegate", attending=True, has_lanyard=True, has_food_coupon=True),
        make_guest("Omar Ali", attending=False),
        make_guest("Gone Guest", category="VIP", attending=True, deleted=True),
    ]

def test_visible_guests_are_sorted_and_exclude_tombstones(guests):
    assert [g.id for g in visible_guests(guests)] == ["adam lee", "maya ito", "omar ali", "zara khan"]

def test_filter_by_category(guests):
    assert [g.name for g in filter_guests(guests, category="Delegate")] == ["Adam Lee", "Maya Ito"]
    assert len(filter_guests(guests, category="All")) == 4

def test_filter_by_attendance(guests):
    present = filter_guests(guests, attendance=AttendanceFilter.PRESENT)
    waiting = filter_guests(guests, attendance=AttendanceFilter.YET_TO_ATTEND)
    assert [g.name for g in present] == ["Maya Ito", "Zara Khan"]
    assert [g.name for g in waiting] == ["Adam Lee", "Omar Ali"]

def test_search_is_case_insensitive_and_combines_with_filters(guests):
    assert [g.name for g in filter_guests(guests, search="  MAYA ")] == ["Maya Ito"]
    assert filter_guests(guests, category="VIP", search="maya") == []
    assert [g.name for g in filter_guests(guests, category="Delegate", attendance=AttendanceFilter.YET_TO_ATTEND, search="a")] == ["Adam Lee"]

def test_summary_counts(guests):
    summary = summarize(guests)
    assert summary.total == 4
    assert summary.attending == 2
    assert summary.yet_to_attend == 2
    assert summary.gifts == 1
    assert summary.food_coupons == 2
    assert summary.lanyards == 1
    assert summary.categories == {"VIP": 1, "Delegate": 2, "Uncategorized": 1}

def test_projections_do_not_mutate_input(guests):
    before = [g.model_dump() for g in guests]
    filter_guests(guests, category="VIP", attendance=AttendanceFilter.PRESENT, search="z")
    summarize(guests)
    assert [g.model_dump() for g in guests] == before
