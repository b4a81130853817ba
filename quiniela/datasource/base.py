from __future__ import annotations

import abc
from typing import Optional, Sequence

from ..types import ResultSet, TimeSlot


class ResultSource(abc.ABC):
    """Abstract fetch+parse strategy for one upstream page."""

    name: str = "source"

    @abc.abstractmethod
    async def fetch_results(self, slots: Optional[Sequence[TimeSlot]] = None) -> ResultSet:
        """Return whatever results the upstream currently publishes.

        Implementations must not raise on transport or markup problems:
        unreachable pages and unrecognised markup both come back as an
        empty `ResultSet`. `slots` lets a caller ask for a subset; sources
        that always read a whole page may ignore it.
        """
