"""
Baseline selection for the inventory dashboard.

Snapshots are stocktakes: any object exposing ``id``, ``store_id``,
``date``, ``is_master`` and ``items`` (lines with ``item_id`` and
``quantity``). Nothing in this module touches the database.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Sequence

from gelato_ops.models.shared.enums import BaselineMode, BaselineSource


@dataclass
class BaselineResult:
    quantities: Dict[int, object] = field(default_factory=dict)
    source: BaselineSource = BaselineSource.NONE
    snapshot_date: Optional[datetime] = None
    snapshot_id: Optional[int] = None
    # Set in auto mode when no master exists and one should be seeded
    needs_master: bool = False

    def quantity_for(self, item_id: int):
        return self.quantities.get(item_id, 0)


def newest_first(snapshots: Iterable) -> List:
    """Order snapshots by date descending; newer ids win ties"""
    return sorted(snapshots, key=lambda s: (s.date, s.id), reverse=True)


def fold_first_wins(snapshots: Iterable) -> Dict[int, object]:
    """
    Walk snapshots newest to oldest and keep the first quantity seen per item.

    A blank line (quantity None) still claims the item, with 0.
    """
    values: Dict[int, object] = {}
    for snapshot in newest_first(snapshots):
        for line in snapshot.items:
            if line.item_id not in values:
                values[line.item_id] = line.quantity if line.quantity is not None else 0
    return values


def latest_counts_by_store(snapshots: Iterable) -> Dict[int, Dict[int, object]]:
    """Per-store "first value wins" fold over a window of recent snapshots"""
    grouped: Dict[int, list] = {}
    for snapshot in snapshots:
        grouped.setdefault(snapshot.store_id, []).append(snapshot)
    return {store_id: fold_first_wins(group) for store_id, group in grouped.items()}


def find_master(snapshots: Iterable, hub_store_id: Optional[int]):
    """Most recent master snapshot taken at the hub, or None"""
    if hub_store_id is None:
        return None
    masters = [s for s in snapshots if s.is_master and s.store_id == hub_store_id]
    ordered = newest_first(masters)
    return ordered[0] if ordered else None


def master_baseline(master) -> BaselineResult:
    quantities = {
        line.item_id: (line.quantity if line.quantity is not None else 0)
        for line in master.items
    }
    return BaselineResult(
        quantities=quantities,
        source=BaselineSource.MASTER,
        snapshot_date=master.date,
        snapshot_id=master.id,
    )


def latest_baseline(recent_snapshots: Sequence) -> BaselineResult:
    if not recent_snapshots:
        return BaselineResult(source=BaselineSource.LATEST)
    newest = newest_first(recent_snapshots)[0]
    return BaselineResult(
        quantities=fold_first_wins(recent_snapshots),
        source=BaselineSource.LATEST,
        snapshot_date=newest.date,
        snapshot_id=newest.id,
    )


def select_baseline(mode: BaselineMode, master, recent_snapshots: Sequence) -> BaselineResult:
    """
    Pick the baseline for ``mode``.

    ``master`` is the hub's newest master snapshot (or None) and
    ``recent_snapshots`` the bounded window of recent snapshots across all
    stores. In master mode a missing master yields an empty baseline.
    """
    mode = BaselineMode(mode)

    if mode == BaselineMode.LATEST:
        return latest_baseline(recent_snapshots)

    if master is not None:
        return master_baseline(master)

    if mode == BaselineMode.MASTER:
        return BaselineResult(source=BaselineSource.NONE)

    result = latest_baseline(recent_snapshots)
    result.needs_master = True
    return result
