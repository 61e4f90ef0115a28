"""
Incoming / outgoing / production sums over a date range.

Orders expose ``status``, ``expected_date`` and ``items`` (``item_id``,
``quantity``); delivery plans ``status``, ``date`` and ``items``;
productions ``produced_at`` and ``ingredients`` (``item_id``,
``quantity_used``).
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Dict, Iterable, List, Optional

from gelato_ops.models.shared.enums import INCOMING_ORDER_STATUSES, OUTGOING_DELIVERY_STATUSES


@dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime

    @classmethod
    def from_dates(cls, start_date: date, end_date: Optional[date] = None) -> "DateRange":
        """Inclusive range from the start of ``start_date`` to the end of ``end_date``"""
        end_date = end_date or start_date
        if end_date < start_date:
            raise ValueError("'to' must not be before 'from'")
        return cls(
            start=datetime.combine(start_date, time.min),
            end=datetime.combine(end_date, time.max),
        )

    def contains(self, moment: Optional[datetime]) -> bool:
        if moment is None:
            return False
        if moment.tzinfo is not None:
            moment = moment.replace(tzinfo=None)
        return self.start <= moment <= self.end

    def days(self) -> List[date]:
        current = self.start.date()
        last = self.end.date()
        result = []
        while current <= last:
            result.append(current)
            current += timedelta(days=1)
        return result


@dataclass
class ItemMovement:
    incoming: object = 0
    outgoing: object = 0
    production: object = 0

    @property
    def net(self):
        return self.incoming - self.outgoing + self.production


@dataclass
class DailyMovement:
    date: date
    incoming: object = 0
    outgoing: object = 0
    production: object = 0

    @property
    def net(self):
        return self.incoming - self.outgoing + self.production


def _counts_as_incoming(order, date_range: DateRange) -> bool:
    return order.status in INCOMING_ORDER_STATUSES and date_range.contains(order.expected_date)


def _counts_as_outgoing(plan, date_range: DateRange) -> bool:
    return plan.status in OUTGOING_DELIVERY_STATUSES and date_range.contains(plan.date)


def aggregate_movements(
    orders: Iterable,
    deliveries: Iterable,
    productions: Iterable,
    date_range: DateRange,
) -> Dict[int, ItemMovement]:
    """Sum the three movement kinds per item id"""
    movements: Dict[int, ItemMovement] = {}

    def entry(item_id: int) -> ItemMovement:
        if item_id not in movements:
            movements[item_id] = ItemMovement()
        return movements[item_id]

    for order in orders:
        if _counts_as_incoming(order, date_range):
            for line in order.items:
                entry(line.item_id).incoming += line.quantity

    for plan in deliveries:
        if _counts_as_outgoing(plan, date_range):
            for line in plan.items:
                entry(line.item_id).outgoing += line.quantity

    # Production usage is added, matching how the dashboard has always reported it
    for production in productions:
        if date_range.contains(production.produced_at):
            for ingredient in production.ingredients:
                entry(ingredient.item_id).production += ingredient.quantity_used

    return movements


def aggregate_daily(
    orders: Iterable,
    deliveries: Iterable,
    productions: Iterable,
    date_range: DateRange,
    item_id: int,
) -> List[DailyMovement]:
    """One row per calendar day in the range for a single item, zero days included"""
    days: Dict[date, DailyMovement] = {day: DailyMovement(date=day) for day in date_range.days()}

    for order in orders:
        if _counts_as_incoming(order, date_range):
            row = days[order.expected_date.date()]
            for line in order.items:
                if line.item_id == item_id:
                    row.incoming += line.quantity

    for plan in deliveries:
        if _counts_as_outgoing(plan, date_range):
            row = days[plan.date.date()]
            for line in plan.items:
                if line.item_id == item_id:
                    row.outgoing += line.quantity

    for production in productions:
        if date_range.contains(production.produced_at):
            row = days[production.produced_at.date()]
            for ingredient in production.ingredients:
                if ingredient.item_id == item_id:
                    row.production += ingredient.quantity_used

    return [days[day] for day in sorted(days)]


def is_partial_window(baseline_date: Optional[datetime], date_range: DateRange) -> bool:
    """True when the baseline was taken after the window opened"""
    if baseline_date is None:
        return False
    if baseline_date.tzinfo is not None:
        baseline_date = baseline_date.replace(tzinfo=None)
    return baseline_date > date_range.start
