from __future__ import annotations

from .catalog import Catalog
from .normalizer import normalize
from .reconciler import Reconciler
from .types import Snapshot


class QuinielaPipeline:
    """Fetch, reconcile and normalize one snapshot per call."""

    def __init__(self, catalog: Catalog, reconciler: Reconciler) -> None:
        self._catalog = catalog
        self._reconciler = reconciler

    async def snapshot(self) -> Snapshot:
        outcome = await self._reconciler.reconcile()
        return normalize(outcome.today, outcome.yesterday, outcome.instant, self._catalog)
