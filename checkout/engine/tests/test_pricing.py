from datetime import date

import pytest

from checkout.data.models import LineStatus
from checkout.engine.catalog import Catalog
from checkout.engine.pricing import PricingOrchestrator
from checkout.engine.promotions import PromotionRegistry
from checkout.errors import InsufficientStockError, ProductNotFoundError

TODAY = date(2024, 6, 1)


def product(name, price, quantity, promotion="null"):
    return {"name": name, "price": str(price), "quantity": str(quantity), "promotion": promotion}


@pytest.fixture
def catalog():
    return Catalog([
        product("cola", 1000, 10, "carbonated_2+1"),
        product("cola", 1000, 10),
        product("cider", 1000, 0, "carbonated_2+1"),
        product("cider", 1000, 10),
        product("water", 500, 10),
        product("potato_chips", 1500, 5, "flash_sale"),
        product("potato_chips", 1500, 5),
        product("cup_noodles", 1700, 1, "md_pick"),
        product("cup_noodles", 1700, 10),
        product("energy_bar", 2000, 0, "flash_sale"),
        product("energy_bar", 2000, 0),
        product("gum", 1000, 3, "bundle_3+2"),
        product("gum", 1000, 10),
    ])


@pytest.fixture
def registry():
    return PromotionRegistry([
        {"name": "carbonated_2+1", "buy": "2", "get": "1", "start_date": "2024-01-01", "end_date": "2024-12-31"},
        {"name": "md_pick", "buy": "1", "get": "1", "start_date": "2024-01-01", "end_date": "2024-12-31"},
        {"name": "flash_sale", "buy": "1", "get": "1", "start_date": "2024-11-01", "end_date": "2024-11-30"},
        {"name": "bundle_3+2", "buy": "3", "get": "2", "start_date": "2024-01-01", "end_date": "2024-12-31"},
    ])


@pytest.fixture
def orchestrator(catalog, registry):
    return PricingOrchestrator(catalog, registry)


def test_product_without_promotion_is_charged_in_full(orchestrator):
    result = orchestrator.price_line("water", 3, TODAY)
    assert result.status is LineStatus.COMPLETE
    assert result.success
    assert result.charge == 1500
    assert result.free_units == 0
    assert result.shortfall is None
    assert result.normal_stock_used == 3


def test_promotion_outside_its_period_is_ignored(orchestrator):
    """A promotional listing does not matter on a day its promotion is not running."""
    result = orchestrator.price_line("potato_chips", 2, TODAY)
    assert result.status is LineStatus.COMPLETE
    assert result.charge == 3000
    assert result.free_units == 0
    assert result.promotion_name is None


def test_promotion_inside_its_period_applies(orchestrator):
    result = orchestrator.price_line("potato_chips", 2, date(2024, 11, 15))
    assert result.status is LineStatus.COMPLETE
    assert result.charge == 1500
    assert result.free_units == 1


def test_incomplete_group_offers_upsell(orchestrator):
    result = orchestrator.price_line("cola", 5, TODAY)
    assert result.status is LineStatus.UPSELL_OFFER
    assert not result.success
    assert result.shortfall == 1
    assert result.allocation.normal_units == 4
    assert result.allocation.eligible_free_units == 2
    assert result.allocation.honored_free_units == 2


def test_accepted_upsell_completes_the_group(orchestrator):
    pending = orchestrator.price_line("cola", 5, TODAY)
    result = orchestrator.confirm(pending, accepted=True)
    assert result.status is LineStatus.COMPLETE
    assert result.requested_quantity == 6
    assert result.charge == 4000
    assert result.free_units == 2
    assert result.promotion_covered_units == 6


def test_declined_upsell_keeps_only_completed_groups(orchestrator):
    pending = orchestrator.price_line("cola", 5, TODAY)
    result = orchestrator.confirm(pending, accepted=False)
    assert result.status is LineStatus.COMPLETE
    assert result.requested_quantity == 5
    assert result.charge == 4000
    assert result.free_units == 1
    assert result.promotion_covered_units == 3


def test_complete_groups_need_no_confirmation(orchestrator):
    result = orchestrator.price_line("cola", 6, TODAY)
    assert result.status is LineStatus.COMPLETE
    assert result.charge == 4000
    assert result.free_units == 2


def test_empty_promotional_stock_notifies_full_shortfall(orchestrator):
    result = orchestrator.price_line("cider", 2, TODAY)
    assert result.status is LineStatus.SHORTFALL_NOTIFY
    assert result.shortfall == result.allocation.eligible_free_units == 1
    assert result.allocation.honored_free_units == 0


def test_accepted_shortfall_charges_normal_price(orchestrator):
    pending = orchestrator.price_line("cider", 2, TODAY)
    result = orchestrator.confirm(pending, accepted=True)
    assert result.status is LineStatus.COMPLETE
    assert result.requested_quantity == 2
    assert result.charge == 2000
    assert result.free_units == 0
    assert result.normal_stock_used == 2
    assert result.promotional_stock_used == 0


def test_declined_shortfall_reprices_reduced_quantity(orchestrator):
    """The reduced request is evaluated again; no offer is made that stock cannot honor."""
    pending = orchestrator.price_line("cider", 2, TODAY)
    result = orchestrator.confirm(pending, accepted=False)
    assert result.requested_quantity == 1
    assert result.status is LineStatus.COMPLETE
    assert result.charge == 1000
    assert result.free_units == 0


def test_dialogue_ends_when_promotional_stock_is_empty(orchestrator):
    """Accepting every offer and declining every shortfall still reaches a final line."""
    asked = []

    def prompt(result):
        asked.append(result.status)
        return result.status is LineStatus.UPSELL_OFFER

    result = orchestrator.settle("cider", 2, TODAY, prompt)
    assert asked == [LineStatus.SHORTFALL_NOTIFY]
    assert result.status is LineStatus.COMPLETE
    assert result.requested_quantity == 1


def test_upsell_is_skipped_when_no_extra_free_unit_can_be_honored(catalog, registry):
    catalog.deduct("cola", 9, from_promotional=True)
    orchestrator = PricingOrchestrator(catalog, registry)
    result = orchestrator.price_line("cola", 4, TODAY)
    assert result.status is LineStatus.COMPLETE
    assert result.free_units == 1
    assert result.charge == 3000


def test_accepted_upsell_rechecks_promotional_stock(orchestrator):
    pending = orchestrator.price_line("gum", 6, TODAY)
    assert pending.status is LineStatus.UPSELL_OFFER
    assert pending.shortfall == 4

    upsold = orchestrator.confirm(pending, accepted=True)
    assert upsold.requested_quantity == 10
    assert upsold.status is LineStatus.SHORTFALL_NOTIFY
    assert upsold.shortfall == 1

    result = orchestrator.confirm(upsold, accepted=True)
    assert result.status is LineStatus.COMPLETE
    assert result.free_units == 3
    assert result.charge == 7000
    assert result.promotional_stock_used == 3
    assert result.normal_stock_used == 7


def test_promotional_stock_is_drawn_first(orchestrator):
    result = orchestrator.price_line("cup_noodles", 2, TODAY)
    assert result.status is LineStatus.COMPLETE
    assert result.charge == 1700
    assert result.free_units == 1
    assert result.promotional_stock_used == 1
    assert result.normal_stock_used == 1


def test_request_beyond_all_stock_fails(orchestrator):
    with pytest.raises(InsufficientStockError) as exc_info:
        orchestrator.price_line("cup_noodles", 12, TODAY)
    assert exc_info.value.requested == 12
    assert exc_info.value.available == 11


def test_request_without_normal_stock_fails_when_promotion_inactive(orchestrator):
    with pytest.raises(InsufficientStockError):
        orchestrator.price_line("energy_bar", 1, TODAY)


def test_upsell_is_skipped_when_stock_cannot_cover_it(orchestrator):
    result = orchestrator.price_line("cola", 20, TODAY)
    assert result.status is LineStatus.COMPLETE
    assert result.free_units == 6
    assert result.charge == 14000
    assert result.promotional_stock_used == 10
    assert result.normal_stock_used == 10


def test_unknown_product(orchestrator):
    with pytest.raises(ProductNotFoundError):
        orchestrator.price_line("juice", 1, TODAY)


def test_settle_walks_through_prompts(orchestrator):
    asked = []

    def prompt(result):
        asked.append(result.status)
        return True

    result = orchestrator.settle("cola", 5, TODAY, prompt)
    assert asked == [LineStatus.UPSELL_OFFER]
    assert result.requested_quantity == 6


def test_commit_deducts_final_quantities_only(orchestrator, catalog):
    pending = orchestrator.price_line("cola", 5, TODAY)
    with pytest.raises(ValueError):
        orchestrator.commit(pending)
    assert catalog.find_promotional("cola").quantity == 10

    result = orchestrator.confirm(pending, accepted=True)
    orchestrator.commit(result)
    assert catalog.find_promotional("cola").quantity == 4
    assert catalog.find_normal("cola").quantity == 10


def test_confirm_requires_pending_line(orchestrator):
    result = orchestrator.price_line("water", 1, TODAY)
    with pytest.raises(ValueError):
        orchestrator.confirm(result, accepted=True)
