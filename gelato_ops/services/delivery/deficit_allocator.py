"""
Greedy distribution of freshly received stock to stores below target.

Stores are visited in the order given; each takes ``min(deficit, remaining)``
and the pool for that item shrinks accordingly. A store visited after the
pool is empty gets nothing, whatever its deficit.
"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple


@dataclass
class LocationStock:
    store_id: int
    targets: Dict[int, object] = field(default_factory=dict)
    current: Dict[int, object] = field(default_factory=dict)

    def deficit(self, item_id: int):
        target = self.targets.get(item_id)
        if target is None:
            return 0
        return max(target - self.current.get(item_id, 0), 0)


@dataclass(frozen=True)
class Allocation:
    store_id: int
    item_id: int
    quantity: object


def combine_received(received: Iterable[Tuple[int, object]]) -> Dict[int, object]:
    """Sum repeated items while keeping first-seen order"""
    totals: Dict[int, object] = {}
    for item_id, quantity in received:
        totals[item_id] = totals.get(item_id, 0) + quantity
    return totals


def allocate_received_stock(
    received: Iterable[Tuple[int, object]],
    locations: Sequence[LocationStock],
) -> List[Allocation]:
    allocations: List[Allocation] = []
    for item_id, quantity in combine_received(received).items():
        remaining = quantity
        for location in locations:
            if remaining <= 0:
                break
            allocated = min(location.deficit(item_id), remaining)
            if allocated > 0:
                allocations.append(Allocation(location.store_id, item_id, allocated))
                remaining -= allocated
    return allocations


def group_by_store(allocations: Iterable[Allocation]) -> Dict[int, Dict[int, object]]:
    grouped: Dict[int, Dict[int, object]] = {}
    for allocation in allocations:
        per_store = grouped.setdefault(allocation.store_id, {})
        per_store[allocation.item_id] = per_store.get(allocation.item_id, 0) + allocation.quantity
    return grouped
