from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from gelato_ops.models.shared.enums import StockStatus
from gelato_ops.services.inventory.baseline_selector import BaselineResult
from gelato_ops.services.inventory.movement_aggregator import ItemMovement
from gelato_ops.services.inventory.stock_status import classify_stock


@dataclass
class DerivedInventoryRow:
    item_id: int
    name: str
    category: Optional[str]
    unit: str
    target_stock: object
    baseline: object
    incoming: object
    outgoing: object
    production: object
    net_movement: object
    derived_current: object
    status: StockStatus


def derive_rows(
    items: Iterable,
    baseline: BaselineResult,
    movements: Dict[int, ItemMovement],
    default_target,
) -> List[DerivedInventoryRow]:
    """Combine baseline and movements into one row per item, in item order"""
    rows = []
    for item in items:
        movement = movements.get(item.id) or ItemMovement()
        base = baseline.quantity_for(item.id)
        net = movement.net
        current = base + net
        target = item.target_number if item.target_number else default_target
        category = getattr(item, "category", None)
        rows.append(
            DerivedInventoryRow(
                item_id=item.id,
                name=item.name,
                category=category.name if category is not None else None,
                unit=item.unit or "units",
                target_stock=target,
                baseline=base,
                incoming=movement.incoming,
                outgoing=movement.outgoing,
                production=movement.production,
                net_movement=net,
                derived_current=current,
                status=classify_stock(current, target),
            )
        )
    return rows


def summarize(rows: List[DerivedInventoryRow]) -> dict:
    incoming = sum((r.incoming for r in rows), 0)
    outgoing = sum((r.outgoing for r in rows), 0)
    production = sum((r.production for r in rows), 0)
    return {
        "total_items": len(rows),
        "low_stock_items": sum(1 for r in rows if r.status == StockStatus.LOW),
        "out_of_stock_items": sum(1 for r in rows if r.status == StockStatus.CRITICAL),
        "high_stock_items": sum(1 for r in rows if r.status == StockStatus.HIGH),
        "incoming_total": incoming,
        "outgoing_total": outgoing,
        "production_total": production,
    }
