from __future__ import annotations

import logging
from typing import Optional, Sequence

from bs4 import BeautifulSoup

from ..catalog import Catalog
from ..fetcher import HtmlFetcher
from ..types import ResultSet, TimeSlot, is_result_value
from .base import ResultSource


class FallbackTableParser:
    """Parse the secondary source's results table.

    One row per region, labelled in its first cell; the remaining cells are
    the slots in catalog order. A cell only counts when its value element
    holds exactly four digits.
    """

    def __init__(
        self,
        catalog: Catalog,
        value_selector: str = "span.numero",
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._catalog = catalog
        self._value_selector = value_selector
        self._logger = logger or logging.getLogger("quiniela.datasource")

    def parse(self, html: Optional[str], slots: Optional[Sequence[TimeSlot]] = None) -> ResultSet:
        results = ResultSet()
        slot_order = self._catalog.slot_order
        wanted = set(slot_order if slots is None else slots)
        if not html or not wanted:
            return results

        soup = BeautifulSoup(html, "html.parser")
        for row in soup.find_all("tr"):
            cells = row.find_all(["th", "td"], recursive=False)
            if not cells:
                continue
            label = cells[0].get_text(" ", strip=True)
            region = self._catalog.match_region(label)
            if region is None:
                continue

            for slot, cell in zip(slot_order, cells[1:]):
                if slot not in wanted or results.has(slot, region):
                    continue
                holder = cell.select_one(self._value_selector)
                if holder is None:
                    continue
                text = holder.get_text(strip=True)
                if is_result_value(text):
                    results.set(slot, region, text)

        self._logger.debug("Fallback table yielded %s values", len(results))
        return results


class FallbackSessionSource(ResultSource):
    """Secondary source served as an AJAX fragment behind a session cookie."""

    name = "fallback"

    def __init__(
        self,
        fetcher: HtmlFetcher,
        landing_url: str,
        ajax_url: str,
        parser: FallbackTableParser,
        encoding: str = "iso-8859-1",
    ) -> None:
        self._fetcher = fetcher
        self._landing_url = landing_url
        self._ajax_url = ajax_url
        self._parser = parser
        self._encoding = encoding

    async def fetch_results(self, slots: Optional[Sequence[TimeSlot]] = None) -> ResultSet:
        if slots is not None and len(slots) == 0:
            return ResultSet()
        html = await self._fetcher.fetch_with_session(self._landing_url, self._ajax_url, self._encoding)
        return self._parser.parse(html, slots)
