from datetime import date

import pytest

from checkout.engine.promotions import PromotionRegistry
from checkout.errors import (
    IllegalPromotionTypeError,
    InvalidDateRangeError,
    OverlappingPromotionPeriodError,
)


def promo(name="carbonated_2+1", buy="2", get="1", start="2024-01-01", end="2024-12-31"):
    return {"name": name, "buy": buy, "get": get, "start_date": start, "end_date": end}


@pytest.mark.parametrize("overrides,field", [
    ({"buy": "0"}, "buy"),
    ({"get": "-1"}, "get"),
    ({"buy": "two"}, "buy"),
    ({"start": "2024/01/01"}, "start_date"),
    ({"end": "2024-02-30"}, "end_date"),
])
def test_rejects_illegal_promotion_fields(overrides, field):
    with pytest.raises(IllegalPromotionTypeError) as exc_info:
        PromotionRegistry([promo(**overrides)])
    assert exc_info.value.field == field


def test_rejects_end_before_start():
    with pytest.raises(InvalidDateRangeError) as exc_info:
        PromotionRegistry([promo(start="2024-05-02", end="2024-05-01")])
    assert exc_info.value.name == "carbonated_2+1"


def test_accepts_single_day_promotion():
    registry = PromotionRegistry([promo(start="2024-05-01", end="2024-05-01")])
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 5, 1)) is not None


@pytest.mark.parametrize("first,second", [
    (("2024-01-01", "2024-06-30"), ("2024-06-30", "2024-12-31")),
    (("2024-01-01", "2024-12-31"), ("2024-03-01", "2024-03-31")),
    (("2024-03-01", "2024-03-31"), ("2024-01-01", "2024-12-31")),
    (("2024-05-01", "2024-05-31"), ("2024-04-01", "2024-05-01")),
])
def test_rejects_overlapping_periods_of_same_name(first, second):
    """Periods are inclusive, so sharing a single boundary day is an overlap."""
    with pytest.raises(OverlappingPromotionPeriodError):
        PromotionRegistry([
            promo(start=first[0], end=first[1]),
            promo(start=second[0], end=second[1]),
        ])


def test_accepts_overlapping_periods_of_different_names():
    registry = PromotionRegistry([promo(), promo(name="md_pick", buy="1", get="1")])
    assert len(registry.records) == 2


def test_active_promotion_picks_the_running_period():
    registry = PromotionRegistry([
        promo(start="2024-01-01", end="2024-06-30"),
        promo(buy="1", start="2024-07-01", end="2024-12-31"),
    ])
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 3, 1)).buy == 2
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 7, 1)).buy == 1
    assert registry.active_promotion_for("carbonated_2+1", date(2025, 1, 1)) is None


def test_active_promotion_unknown_name():
    registry = PromotionRegistry([promo()])
    assert registry.active_promotion_for("flash_sale", date(2024, 3, 1)) is None


def test_bounds_are_inclusive():
    registry = PromotionRegistry([promo(start="2024-11-01", end="2024-11-30")])
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 11, 1)) is not None
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 11, 30)) is not None
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 10, 31)) is None
    assert registry.active_promotion_for("carbonated_2+1", date(2024, 12, 1)) is None
