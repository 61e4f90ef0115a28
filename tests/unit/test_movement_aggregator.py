from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
import pytest
from gelato_ops.models.shared.enums import DeliveryPlanStatus, OrderStatus
from gelato_ops.services.inventory.movement_aggregator import (
    DateRange,
    aggregate_daily,
    aggregate_movements,
    is_partial_window,
)

MILK = 10
CREAM = 11


def lines(mapping, field="quantity"):
    return [SimpleNamespace(item_id=item_id, **{field: qty}) for item_id, qty in mapping.items()]


def order(status, expected, mapping):
    return SimpleNamespace(status=status.value, expected_date=expected, items=lines(mapping))


def plan(status, when, mapping):
    return SimpleNamespace(status=status.value, date=when, items=lines(mapping))


def production(when, mapping):
    return SimpleNamespace(produced_at=when, ingredients=lines(mapping, field="quantity_used"))


@pytest.fixture
def window():
    return DateRange.from_dates(date(2026, 3, 1), date(2026, 3, 2))


class TestDateRange:
    def test_covers_whole_days(self, window):
        assert window.contains(datetime(2026, 3, 1, 0, 0))
        assert window.contains(datetime(2026, 3, 2, 23, 59, 59))
        assert not window.contains(datetime(2026, 3, 3, 0, 0))
        assert not window.contains(None)

    def test_end_defaults_to_start(self):
        single = DateRange.from_dates(date(2026, 3, 1))
        assert single.days() == [date(2026, 3, 1)]

    def test_end_before_start_is_rejected(self):
        with pytest.raises(ValueError):
            DateRange.from_dates(date(2026, 3, 2), date(2026, 3, 1))


class TestAggregateMovements:
    def test_only_counting_statuses_inside_window(self, window):
        orders = [
            order(OrderStatus.PENDING, datetime(2026, 3, 1, 10), {MILK: Decimal("5")}),
            order(OrderStatus.CONFIRMED, datetime(2026, 3, 2, 10), {MILK: Decimal("2"), CREAM: Decimal("1")}),
            order(OrderStatus.DRAFT, datetime(2026, 3, 1, 10), {MILK: Decimal("50")}),
            order(OrderStatus.RECEIVED, datetime(2026, 3, 1, 10), {MILK: Decimal("50")}),
            order(OrderStatus.PENDING, datetime(2026, 3, 5, 10), {MILK: Decimal("50")}),
            order(OrderStatus.PENDING, None, {MILK: Decimal("50")}),
        ]
        plans = [
            plan(DeliveryPlanStatus.CONFIRMED, datetime(2026, 3, 1), {MILK: Decimal("3")}),
            plan(DeliveryPlanStatus.DRAFT, datetime(2026, 3, 1), {MILK: Decimal("30")}),
            plan(DeliveryPlanStatus.SENT, datetime(2026, 3, 1), {MILK: Decimal("30")}),
        ]
        productions = [production(datetime(2026, 3, 2, 8), {MILK: Decimal("1.5")})]

        movements = aggregate_movements(orders, plans, productions, window)

        assert movements[MILK].incoming == Decimal("7")
        assert movements[MILK].outgoing == Decimal("3")
        assert movements[MILK].production == Decimal("1.5")
        assert movements[MILK].net == Decimal("5.5")
        assert movements[CREAM].incoming == Decimal("1")
        assert movements[CREAM].outgoing == 0

    def test_daily_rows_cover_every_day_and_match_totals(self, window):
        orders = [order(OrderStatus.PENDING, datetime(2026, 3, 2, 9), {MILK: Decimal("4")})]
        plans = [plan(DeliveryPlanStatus.CONFIRMED, datetime(2026, 3, 1), {MILK: Decimal("1")})]
        productions = [production(datetime(2026, 3, 1, 12), {CREAM: Decimal("2")})]

        days = aggregate_daily(orders, plans, productions, window, MILK)
        totals = aggregate_movements(orders, plans, productions, window)[MILK]

        assert [d.date for d in days] == [date(2026, 3, 1), date(2026, 3, 2)]
        assert days[0].outgoing == Decimal("1") and days[0].incoming == 0
        assert days[1].incoming == Decimal("4")
        assert sum(d.incoming for d in days) == totals.incoming
        assert sum(d.outgoing for d in days) == totals.outgoing
        assert sum(d.production for d in days) == totals.production == 0


class TestPartialWindow:
    def test_baseline_after_window_start(self, window):
        assert is_partial_window(datetime(2026, 3, 1, 12), window)

    def test_baseline_before_window_start(self, window):
        assert not is_partial_window(datetime(2026, 2, 28, 12), window)

    def test_no_baseline_date(self, window):
        assert not is_partial_window(None, window)
