"""Unit tests for region diff and merge helpers."""

from __future__ import annotations

from core.types import PhotoEntry
from ingest.reconcile import merge_region_entries, plan_region


def _entry(photo_id: str, title: str = "") -> PhotoEntry:
    return PhotoEntry(photo_id=photo_id, title=title or f"title-{photo_id}")


def test_plan_region_splits_hits_and_misses_in_ingest_order() -> None:
    """Ids should be classified against the snapshot preserving ingest order."""
    existing = {"2": _entry("2"), "4": _entry("4")}

    plan = plan_region("queens", ["1", "2", "3", "4"], existing)

    assert (plan.hit_ids, plan.miss_ids) == (("2", "4"), ("1", "3"))


def test_plan_region_deduplicates_ids() -> None:
    """Repeated ingest ids should be planned once."""
    plan = plan_region("queens", ["1", "1", "2"], {})

    assert (plan.photo_ids, plan.miss_ids) == (("1", "2"), ("1", "2"))


def test_merge_region_entries_follows_ingest_order() -> None:
    """Merged output should follow ingest order, not snapshot order."""
    existing = {"3": _entry("3"), "1": _entry("1")}
    plan = plan_region("queens", ["1", "2", "3"], existing)

    merged = merge_region_entries(plan, existing, {"2": _entry("2")})

    assert [entry.photo_id for entry in merged] == ["1", "2", "3"]


def test_merge_region_entries_carries_hits_verbatim() -> None:
    """A hit should reuse the snapshot entry even if a fetch produced another."""
    existing = {"1": _entry("1", title="persisted")}
    plan = plan_region("queens", ["1"], existing)

    merged = merge_region_entries(plan, existing, {"1": _entry("1", title="fresh")})

    assert merged[0].title == "persisted"


def test_merge_region_entries_drops_ids_not_in_ingest_list() -> None:
    """Snapshot entries no longer listed should not be carried forward."""
    existing = {"1": _entry("1"), "old": _entry("old")}
    plan = plan_region("queens", ["1"], existing)

    merged = merge_region_entries(plan, existing, {})

    assert [entry.photo_id for entry in merged] == ["1"]


def test_merge_region_entries_omits_skipped_ids() -> None:
    """Misses without a fetched entry should be left out."""
    plan = plan_region("queens", ["1", "2"], {})

    merged = merge_region_entries(plan, {}, {"2": _entry("2")})

    assert [entry.photo_id for entry in merged] == ["2"]
