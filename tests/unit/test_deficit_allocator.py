from decimal import Decimal
from gelato_ops.services.delivery.deficit_allocator import (
    Allocation,
    LocationStock,
    allocate_received_stock,
    combine_received,
    group_by_store,
)

MILK = 10
CREAM = 11


class TestAllocateReceivedStock:
    def test_stores_take_min_of_deficit_and_remaining_in_order(self):
        locations = [
            LocationStock(store_id=1, targets={MILK: 10}, current={MILK: 4}),
            LocationStock(store_id=2, targets={MILK: 10}, current={}),
            LocationStock(store_id=3, targets={MILK: 10}, current={MILK: 0}),
        ]
        allocations = allocate_received_stock([(MILK, 12)], locations)
        assert allocations == [Allocation(1, MILK, 6), Allocation(2, MILK, 6)]

    def test_total_never_exceeds_received(self):
        locations = [
            LocationStock(store_id=store_id, targets={MILK: Decimal("7.5")}, current={})
            for store_id in range(1, 6)
        ]
        received = Decimal("20")
        allocations = allocate_received_stock([(MILK, received)], locations)
        assert sum(a.quantity for a in allocations) == received
        assert [a.quantity for a in allocations] == [Decimal("7.5"), Decimal("7.5"), Decimal("5")]

    def test_surplus_stays_at_hub(self):
        locations = [LocationStock(store_id=1, targets={MILK: 10}, current={MILK: 8})]
        allocations = allocate_received_stock([(MILK, 50)], locations)
        assert allocations == [Allocation(1, MILK, 2)]

    def test_stores_at_or_above_target_get_nothing(self):
        locations = [
            LocationStock(store_id=1, targets={MILK: 10}, current={MILK: 15}),
            LocationStock(store_id=2, targets={}, current={}),
        ]
        assert allocate_received_stock([(MILK, 5)], locations) == []

    def test_repeated_items_are_summed_first(self):
        assert combine_received([(MILK, 2), (CREAM, 1), (MILK, 3)]) == {MILK: 5, CREAM: 1}
        locations = [LocationStock(store_id=1, targets={MILK: 10}, current={})]
        allocations = allocate_received_stock([(MILK, 2), (MILK, 3)], locations)
        assert allocations == [Allocation(1, MILK, 5)]

    def test_each_item_has_its_own_pool(self):
        locations = [
            LocationStock(store_id=1, targets={MILK: 3, CREAM: 1}, current={}),
            LocationStock(store_id=2, targets={MILK: 3, CREAM: 5}, current={}),
        ]
        allocations = allocate_received_stock([(MILK, 4), (CREAM, 4)], locations)
        assert group_by_store(allocations) == {1: {MILK: 3, CREAM: 1}, 2: {MILK: 1, CREAM: 3}}
