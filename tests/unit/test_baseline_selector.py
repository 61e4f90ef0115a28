from datetime import datetime
from types import SimpleNamespace
from gelato_ops.models.shared.enums import BaselineMode, BaselineSource
from gelato_ops.services.inventory.baseline_selector import (
    find_master,
    fold_first_wins,
    latest_counts_by_store,
    select_baseline,
)

HUB = 1
NORTH = 2


def snapshot(snapshot_id, store_id, when, lines, is_master=False):
    return SimpleNamespace(
        id=snapshot_id,
        store_id=store_id,
        date=when,
        is_master=is_master,
        items=[SimpleNamespace(item_id=item_id, quantity=qty) for item_id, qty in lines.items()],
    )


class TestFoldFirstWins:
    def test_newest_value_wins_regardless_of_input_order(self):
        older = snapshot(1, HUB, datetime(2026, 3, 1), {10: 5, 11: 7})
        newer = snapshot(2, NORTH, datetime(2026, 3, 2), {10: 9})
        assert fold_first_wins([older, newer]) == {10: 9, 11: 7}

    def test_same_date_prefers_higher_id(self):
        when = datetime(2026, 3, 1, 9, 0)
        first = snapshot(1, HUB, when, {10: 1})
        second = snapshot(2, HUB, when, {10: 2})
        assert fold_first_wins([first, second]) == {10: 2}

    def test_blank_line_claims_item_with_zero(self):
        newer = snapshot(2, HUB, datetime(2026, 3, 2), {10: None})
        older = snapshot(1, HUB, datetime(2026, 3, 1), {10: 40})
        assert fold_first_wins([newer, older]) == {10: 0}

    def test_per_store_fold(self):
        counts = latest_counts_by_store([
            snapshot(1, HUB, datetime(2026, 3, 1), {10: 5}),
            snapshot(2, NORTH, datetime(2026, 3, 1), {10: 3}),
            snapshot(3, NORTH, datetime(2026, 3, 2), {10: 4}),
        ])
        assert counts == {HUB: {10: 5}, NORTH: {10: 4}}


class TestSelectBaseline:
    def setup_method(self):
        self.master = snapshot(1, HUB, datetime(2026, 3, 1), {10: 8, 11: 5}, is_master=True)
        self.recent = [
            snapshot(2, NORTH, datetime(2026, 3, 3), {10: 100}),
            self.master,
        ]

    def test_master_mode_ignores_newer_plain_snapshots(self):
        result = select_baseline(BaselineMode.MASTER, self.master, self.recent)
        assert result.source == BaselineSource.MASTER
        assert result.quantities == {10: 8, 11: 5}
        assert result.snapshot_date == datetime(2026, 3, 1)
        assert not result.needs_master

    def test_master_mode_without_master_is_empty(self):
        result = select_baseline(BaselineMode.MASTER, None, self.recent)
        assert result.source == BaselineSource.NONE
        assert result.quantity_for(10) == 0

    def test_latest_mode_ignores_master_flag(self):
        result = select_baseline(BaselineMode.LATEST, self.master, self.recent)
        assert result.source == BaselineSource.LATEST
        assert result.quantities == {10: 100, 11: 5}
        assert result.snapshot_date == datetime(2026, 3, 3)

    def test_latest_mode_without_snapshots_is_all_zero(self):
        result = select_baseline(BaselineMode.LATEST, None, [])
        assert result.source == BaselineSource.LATEST
        assert result.quantities == {}
        assert result.snapshot_date is None
        assert result.quantity_for(42) == 0

    def test_auto_prefers_master(self):
        result = select_baseline(BaselineMode.AUTO, self.master, self.recent)
        assert result.source == BaselineSource.MASTER

    def test_auto_without_master_falls_back_and_asks_for_one(self):
        plain = [snapshot(2, NORTH, datetime(2026, 3, 3), {10: 100})]
        result = select_baseline(BaselineMode.AUTO, None, plain)
        assert result.source == BaselineSource.LATEST
        assert result.quantities == {10: 100}
        assert result.needs_master


class TestFindMaster:
    def test_only_hub_masters_count(self):
        elsewhere = snapshot(3, NORTH, datetime(2026, 3, 5), {10: 1}, is_master=True)
        hub_old = snapshot(1, HUB, datetime(2026, 3, 1), {10: 2}, is_master=True)
        hub_new = snapshot(2, HUB, datetime(2026, 3, 2), {10: 3}, is_master=True)
        assert find_master([elsewhere, hub_old, hub_new], HUB) is hub_new

    def test_no_hub_means_no_master(self):
        hub_master = snapshot(1, HUB, datetime(2026, 3, 1), {10: 2}, is_master=True)
        assert find_master([hub_master], None) is None
