from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..catalog import Catalog, RegionInfo
from ..fetcher import HtmlFetcher
from ..types import ResultSet, TimeSlot, is_result_value
from .base import ResultSource

ContainerLocator = Callable[[BeautifulSoup, RegionInfo], Optional[Tag]]


def locate_by_class(soup: BeautifulSoup, info: RegionInfo) -> Optional[Tag]:
    return soup.find(class_=info.container_class)


def locate_by_id(soup: BeautifulSoup, info: RegionInfo) -> Optional[Tag]:
    # Yesterday's page gives every container the same class; only ids differ.
    return soup.find(id=info.container_id)


@dataclass(frozen=True)
class StructuralSelectors:
    desktop: str = "div.vista-escritorio"
    number: str = "a.enlaces-numeros"


class StructuralParser:
    """Read per-region result blocks from the primary source.

    Each region container holds a desktop block and a mobile copy of the
    same numbers; only the desktop block is read. The i-th number element
    belongs to the i-th slot of the catalog.
    """

    def __init__(
        self,
        catalog: Catalog,
        locate: ContainerLocator,
        selectors: StructuralSelectors = StructuralSelectors(),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._catalog = catalog
        self._locate = locate
        self._selectors = selectors
        self._logger = logger or logging.getLogger("quiniela.datasource")

    def parse(self, html: Optional[str]) -> ResultSet:
        results = ResultSet()
        if not html:
            return results

        soup = BeautifulSoup(html, "html.parser")
        slot_order = self._catalog.slot_order
        for info in self._catalog.regions:
            for slot, value in zip(slot_order, self._extract(soup, info)):
                if value is not None:
                    results.set(slot, info.region, value)
        return results

    def _extract(self, soup: BeautifulSoup, info: RegionInfo) -> List[Optional[str]]:
        container = self._locate(soup, info)
        if container is None:
            self._logger.debug("No container for region %s", info.region.value)
            return []
        desktop = container.select_one(self._selectors.desktop)
        if desktop is None:
            self._logger.debug("No desktop block for region %s", info.region.value)
            return []

        values: List[Optional[str]] = []
        for element in desktop.select(self._selectors.number):
            text = element.get_text(strip=True)
            # "----" and friends mark a draw that has not happened yet.
            values.append(text if is_result_value(text) else None)
        return values


def today_parser(catalog: Catalog, selectors: StructuralSelectors = StructuralSelectors()) -> StructuralParser:
    return StructuralParser(catalog, locate_by_class, selectors)


def yesterday_parser(
    catalog: Catalog, selectors: StructuralSelectors = StructuralSelectors()
) -> StructuralParser:
    return StructuralParser(catalog, locate_by_id, selectors)


class StructuralPageSource(ResultSource):
    """One primary-source page fetched with plain browser headers."""

    def __init__(self, name: str, fetcher: HtmlFetcher, url: str, parser: StructuralParser) -> None:
        self.name = name
        self._fetcher = fetcher
        self._url = url
        self._parser = parser

    async def fetch_results(self, slots: Optional[Sequence[TimeSlot]] = None) -> ResultSet:
        html = await self._fetcher.fetch_text(self._url)
        return self._parser.parse(html)
