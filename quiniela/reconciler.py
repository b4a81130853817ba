from __future__ import annotations

import asyncio
import datetime as dt
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

from .catalog import Catalog
from .clock import DEFAULT_TIMEZONE, is_past_deadline, to_local
from .datasource import ResultSource
from .types import Region, ResultSet, TimeSlot


def needs_fallback(
    slot: TimeSlot,
    results: ResultSet,
    instant: dt.datetime,
    catalog: Catalog,
    zone_name: str = DEFAULT_TIMEZONE,
) -> bool:
    if not is_past_deadline(slot, instant, catalog.deadlines, zone_name):
        return False
    return all(not results.has(slot, region) for region in catalog.key_regions)


def flag_missing_slots(
    results: ResultSet, instant: dt.datetime, catalog: Catalog, zone_name: str = DEFAULT_TIMEZONE
) -> Tuple[TimeSlot, ...]:
    return tuple(
        slot for slot in catalog.deadline_slots() if needs_fallback(slot, results, instant, catalog, zone_name)
    )


def merge_missing(
    primary: ResultSet,
    fallback: ResultSet,
    slots: Iterable[TimeSlot],
    regions: Iterable[Region],
) -> ResultSet:
    """Copy fallback values into a copy of `primary` where it has none.

    Values already present in `primary` always win.
    """
    merged = primary.copy()
    regions = tuple(regions)
    for slot in slots:
        for region in regions:
            if merged.has(slot, region):
                continue
            value = fallback.get(slot, region)
            if value is not None:
                merged.set(slot, region, value)
    return merged


@dataclass(frozen=True)
class ReconciliationOutcome:
    today: ResultSet
    yesterday: ResultSet
    instant: dt.datetime
    flagged: Tuple[TimeSlot, ...] = ()


class Reconciler:
    def __init__(
        self,
        catalog: Catalog,
        today_source: ResultSource,
        yesterday_source: ResultSource,
        fallback_source: Optional[ResultSource],
        clock: Callable[[], dt.datetime],
        logger: Optional[logging.Logger] = None,
        zone_name: str = DEFAULT_TIMEZONE,
    ) -> None:
        self._catalog = catalog
        self._today = today_source
        self._yesterday = yesterday_source
        self._fallback = fallback_source
        self._clock = clock
        self._logger = logger or logging.getLogger("quiniela.reconciler")
        self._zone_name = zone_name

    async def reconcile(self) -> ReconciliationOutcome:
        today, yesterday = await asyncio.gather(
            self._today.fetch_results(),
            self._yesterday.fetch_results(),
        )
        instant = to_local(self._clock(), self._zone_name)

        flagged = flag_missing_slots(today, instant, self._catalog, self._zone_name)
        if not flagged:
            return ReconciliationOutcome(today=today, yesterday=yesterday, instant=instant)

        names = [slot.value for slot in flagged]
        if self._fallback is None:
            self._logger.info("Slots %s are late but no fallback source is configured.", names)
            return ReconciliationOutcome(today=today, yesterday=yesterday, instant=instant, flagged=flagged)

        self._logger.info("Slots %s missing past deadline; querying %s.", names, self._fallback.name)
        backup = await self._fallback.fetch_results(flagged)
        if backup.is_empty():
            self._logger.warning("Fallback source returned no values for %s.", names)

        merged = merge_missing(today, backup, flagged, self._catalog.region_order)
        self._logger.debug("Merged %s fallback values.", len(merged) - len(today))
        return ReconciliationOutcome(today=merged, yesterday=yesterday, instant=instant, flagged=flagged)
