from __future__ import annotations

import datetime as dt
import logging
import sys
from functools import partial
from typing import Callable, Optional

from .catalog import DEFAULT_CATALOG, Catalog
from .clock import now_in
from .config import QuinielaSettings
from .datasource.fallback import FallbackSessionSource, FallbackTableParser
from .datasource.structural import StructuralPageSource, StructuralSelectors, today_parser, yesterday_parser
from .fetcher import HtmlFetcher
from .pipeline import QuinielaPipeline
from .reconciler import Reconciler


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )


def build_fallback_source(
    settings: QuinielaSettings, fetcher: HtmlFetcher, catalog: Catalog
) -> Optional[FallbackSessionSource]:
    fb_settings = settings.fallback
    if not fb_settings.enabled:
        return None
    if not fb_settings.landing_url or not fb_settings.ajax_url:
        raise RuntimeError("FALLBACK__LANDING_URL and FALLBACK__AJAX_URL must be set when the fallback is enabled.")
    return FallbackSessionSource(
        fetcher,
        landing_url=fb_settings.landing_url,
        ajax_url=fb_settings.ajax_url,
        parser=FallbackTableParser(catalog, value_selector=fb_settings.value_selector),
        encoding=fb_settings.encoding,
    )


def build_pipeline(
    settings: QuinielaSettings,
    catalog: Optional[Catalog] = None,
    clock: Optional[Callable[[], dt.datetime]] = None,
    fetcher: Optional[HtmlFetcher] = None,
) -> QuinielaPipeline:
    catalog = (catalog or DEFAULT_CATALOG).with_key_regions(settings.key_regions)
    fetcher = fetcher or HtmlFetcher(settings.http)
    selectors = StructuralSelectors(
        desktop=settings.primary.desktop_selector,
        number=settings.primary.number_selector,
    )

    today_source = StructuralPageSource("today", fetcher, settings.primary.today_url, today_parser(catalog, selectors))
    yesterday_source = StructuralPageSource(
        "yesterday", fetcher, settings.primary.yesterday_url, yesterday_parser(catalog, selectors)
    )

    reconciler = Reconciler(
        catalog,
        today_source,
        yesterday_source,
        build_fallback_source(settings, fetcher, catalog),
        clock=clock or partial(now_in, settings.timezone),
        zone_name=settings.timezone,
    )
    return QuinielaPipeline(catalog, reconciler)
