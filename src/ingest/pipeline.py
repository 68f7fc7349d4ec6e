"""Region reconciliation pipeline.

This module coordinates id loading, snapshot diffing, metadata fetches,
and snapshot writes so each region snapshot converges on its ingest list.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, Protocol

from core.config import PhotoSnapConfig
from core.errors import PhotoSnapConfigError, PhotoSnapError, PhotoSnapPhotoUnavailableError
from core.logging_config import get_logger
from core.types import PhotoEntry, RegionPlan, RegionResult, RunReport
from ingest.id_list_reader import discover_regions, read_id_list
from ingest.reconcile import merge_region_entries, plan_region
from store.snapshot_store import SnapshotStore
from transforms.entry_transform import build_entry

_LOGGER = get_logger(__name__)


class MetadataSource(Protocol):
    """Remote calls needed to build one entry."""

    def fetch_info(self, photo_id: str) -> dict: ...

    def fetch_sizes(self, photo_id: str) -> dict: ...


class RegionReconciler:
    """Runs the load, diff, fetch, merge, and persist stages for one region.

    Nothing is written until every missing id has either been fetched or
    reported unavailable, so a failed run leaves the prior snapshot as is.
    """

    def __init__(
        self,
        config: PhotoSnapConfig,
        client: MetadataSource,
        store: SnapshotStore | None = None,
    ) -> None:
        self._config = config
        self._client = client
        self._store = store or SnapshotStore(config)

    def run(self, region: str, ingest_path: Path) -> RegionResult:
        """Reconcile one region snapshot with its ingest list.

        Args:
            region: Region name.
            ingest_path: Region ingest file.

        Returns:
            Summary of the written snapshot.

        Raises:
            PhotoSnapError: If loading, fetching, or persisting fails.
        """
        plan, existing_entries = load_region_plan(self._store, region, ingest_path)
        fetched_entries, skipped_ids = self._fetch_missing(plan)
        merged_entries = merge_region_entries(plan, existing_entries, fetched_entries)
        snapshot_path = self._store.write(region, merged_entries)
        return RegionResult(
            region=region,
            snapshot_path=snapshot_path,
            entry_count=len(merged_entries),
            reused_count=len(plan.hit_ids),
            fetched_ids=tuple(
                photo_id for photo_id in plan.miss_ids if photo_id in fetched_entries
            ),
            skipped_ids=tuple(skipped_ids),
        )

    def _fetch_missing(self, plan: RegionPlan) -> tuple[dict[str, PhotoEntry], list[str]]:
        """Fetch and transform every miss.

        Returns:
            Entries keyed by id and the ids reported unavailable.
        """
        if not plan.miss_ids:
            return {}, []
        workers = min(self._config.fetch_workers, len(plan.miss_ids))
        if workers == 1:
            outcomes = [self._fetch_entry(plan.region, photo_id) for photo_id in plan.miss_ids]
        else:
            outcomes = self._fetch_concurrently(plan, workers)
        fetched: dict[str, PhotoEntry] = {}
        skipped: list[str] = []
        for photo_id, entry in zip(plan.miss_ids, outcomes):
            if entry is None:
                skipped.append(photo_id)
            else:
                fetched[photo_id] = entry
        return fetched, skipped

    def _fetch_concurrently(self, plan: RegionPlan, workers: int) -> list[PhotoEntry | None]:
        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix=f"photosnap-{plan.region}"
        ) as executor:
            futures = [
                executor.submit(self._fetch_entry, plan.region, photo_id)
                for photo_id in plan.miss_ids
            ]
            try:
                return [future.result() for future in futures]
            except PhotoSnapError:
                for future in futures:
                    future.cancel()
                raise

    def _fetch_entry(self, region: str, photo_id: str) -> PhotoEntry | None:
        """Fetch both payloads for one id and build its entry.

        Returns:
            The built entry, or None when the photo is unavailable upstream.
        """
        try:
            raw_info = self._client.fetch_info(photo_id)
            raw_sizes = self._client.fetch_sizes(photo_id)
        except PhotoSnapPhotoUnavailableError as error:
            _LOGGER.warning(
                "photo_skipped",
                region=region,
                photo_id=photo_id,
                api_code=error.api_code,
                reason=str(error),
            )
            return None
        entry = build_entry(photo_id, raw_info, raw_sizes)
        _LOGGER.info(
            "photo_fetched", region=region, photo_id=photo_id, size_count=len(entry.sizes)
        )
        return entry


def select_regions(ingest_dir: Path, regions: Iterable[str] | None = None) -> dict[str, Path]:
    """Resolve requested region names to ingest files.

    Args:
        ingest_dir: Directory of region ingest files.
        regions: Optional subset of region names; all regions when omitted.

    Returns:
        Region name to ingest path in region-name order.

    Raises:
        PhotoSnapConfigError: If a requested region has no ingest file.
    """
    available = discover_regions(ingest_dir)
    if regions is None:
        return available
    requested = sorted(set(regions))
    unknown = [name for name in requested if name not in available]
    if unknown:
        raise PhotoSnapConfigError(
            f"Unknown region(s) {', '.join(unknown)}: no ingest file in {ingest_dir}. "
            f"Available regions: {', '.join(available) or 'none'}."
        )
    return {name: available[name] for name in requested}


def reconcile_regions(
    config: PhotoSnapConfig,
    client: MetadataSource,
    regions: Iterable[str] | None = None,
) -> RunReport:
    """Reconcile every selected region snapshot.

    Regions are independent: a failed region is logged and reported while
    the others still run. All regions share the given client and therefore
    its rate limiter.

    Args:
        config: Runtime configuration.
        client: Metadata source shared by all regions.
        regions: Optional subset of region names.

    Returns:
        Per-region results and failures.

    Raises:
        PhotoSnapConfigError: If the ingest directory or a requested region is missing.
    """
    selected = select_regions(config.ingest_dir, regions)
    reconciler = RegionReconciler(config, client)
    workers = min(config.region_workers, max(1, len(selected)))
    if workers == 1:
        outcomes = [_run_region(reconciler, name, path) for name, path in selected.items()]
    else:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="photosnap") as executor:
            futures = [
                executor.submit(_run_region, reconciler, name, path)
                for name, path in selected.items()
            ]
            outcomes = [future.result() for future in futures]
    results: list[RegionResult] = []
    failures: dict[str, str] = {}
    for name, outcome in zip(selected, outcomes):
        if isinstance(outcome, RegionResult):
            results.append(outcome)
        else:
            failures[name] = str(outcome)
    _LOGGER.info(
        "run_completed",
        region_count=len(selected),
        succeeded=len(results),
        failed=len(failures),
    )
    return RunReport(results=tuple(results), failures=failures)


def plan_regions(
    config: PhotoSnapConfig,
    regions: Iterable[str] | None = None,
) -> list[RegionPlan]:
    """Compute HIT/MISS plans for selected regions without remote calls."""
    selected = select_regions(config.ingest_dir, regions)
    store = SnapshotStore(config)
    return [load_region_plan(store, name, path)[0] for name, path in selected.items()]


def load_region_plan(
    store: SnapshotStore,
    region: str,
    ingest_path: Path,
) -> tuple[RegionPlan, dict[str, PhotoEntry]]:
    """Load ingest ids and the prior snapshot, then classify the ids.

    Args:
        store: Snapshot store for the run.
        region: Region name.
        ingest_path: Region ingest file.

    Returns:
        The region plan and the prior snapshot keyed by id.

    Raises:
        PhotoSnapIngestError: If the ingest file is missing or malformed.
        PhotoSnapStoreError: If the prior snapshot is corrupt.
    """
    photo_ids = read_id_list(ingest_path)
    _LOGGER.info("region_ids_loaded", region=region, id_count=len(photo_ids))
    existing_entries = store.read(region)
    _LOGGER.info("region_snapshot_loaded", region=region, entry_count=len(existing_entries))
    plan = plan_region(region, photo_ids, existing_entries)
    _LOGGER.info(
        "region_diffed",
        region=region,
        hit_count=len(plan.hit_ids),
        miss_count=len(plan.miss_ids),
        duplicate_count=len(photo_ids) - len(plan.photo_ids),
    )
    return plan, existing_entries


def _run_region(
    reconciler: RegionReconciler,
    region: str,
    ingest_path: Path,
) -> RegionResult | PhotoSnapError:
    """Run one region and capture domain failures as values."""
    try:
        return reconciler.run(region, ingest_path)
    except PhotoSnapError as error:
        _LOGGER.error(
            "region_failed",
            region=region,
            error_type=error.__class__.__name__,
            error=str(error),
        )
        return error
