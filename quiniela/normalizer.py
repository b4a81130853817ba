from __future__ import annotations

import datetime as dt
from typing import Dict, Optional

from .catalog import Catalog
from .clock import format_date, format_queried_at, previous_day
from .types import ResultSet, Snapshot


def normalize(today: ResultSet, yesterday: ResultSet, instant: dt.datetime, catalog: Catalog) -> Snapshot:
    """Build the display snapshot.

    Every region and slot label is present; absent results are ``None``.
    The late-night column comes from yesterday's results only.
    """
    sorteos: Dict[str, Dict[str, Optional[str]]] = {}
    for region_info in catalog.regions:
        sorteos[region_info.label] = {
            slot_info.label: today.get(slot_info.slot, region_info.region) for slot_info in catalog.slots
        }

    late_night = catalog.late_night
    nocturnas_ayer = {
        region_info.label: yesterday.get(late_night, region_info.region) for region_info in catalog.regions
    }

    return Snapshot(
        fecha=format_date(instant),
        fecha_ayer=format_date(previous_day(instant)),
        consultado=format_queried_at(instant),
        sorteos=sorteos,
        nocturnas_ayer=nocturnas_ayer,
    )
