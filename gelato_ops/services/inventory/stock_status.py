from gelato_ops.models.shared.enums import StockStatus


def classify_stock(current, target) -> StockStatus:
    """
    Classify a derived on-hand quantity against the item's target.

    0 or below a quarter of target is critical, below half is low,
    above double is high. Thresholds are strict, so exactly a quarter
    of target is low and exactly double is normal.
    """
    if current == 0:
        return StockStatus.CRITICAL
    # Multiply instead of scaling the target so Decimal and int inputs compare exactly
    if current * 4 < target:
        return StockStatus.CRITICAL
    if current * 2 < target:
        return StockStatus.LOW
    if current > target * 2:
        return StockStatus.HIGH
    return StockStatus.NORMAL
