from __future__ import annotations

import asyncio
import logging
from typing import Callable, Dict, Mapping, Optional

import requests

from .config import HttpSettings


class HtmlFetcher:
    """Best-effort HTML downloads.

    Every failure (transport error, timeout, non-2xx status) is logged and
    reported as ``None``; nothing is raised to the caller.
    """

    def __init__(
        self,
        settings: HttpSettings,
        session_factory: Callable[[], requests.Session] = requests.Session,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._settings = settings
        self._session_factory = session_factory
        self._logger = logger or logging.getLogger("quiniela.fetcher")

    def browser_headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            "User-Agent": self._settings.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": self._settings.accept_language,
            "Cache-Control": "no-cache",
            "Pragma": "no-cache",
        }
        if extra:
            headers.update(extra)
        return headers

    async def fetch_text(self, url: str, headers: Optional[Mapping[str, str]] = None) -> Optional[str]:
        return await asyncio.to_thread(self._sync_fetch_text, url, headers)

    async def fetch_with_session(
        self, landing_url: str, ajax_url: str, encoding: str = "iso-8859-1"
    ) -> Optional[str]:
        return await asyncio.to_thread(self._sync_fetch_with_session, landing_url, ajax_url, encoding)

    def _sync_fetch_text(self, url: str, headers: Optional[Mapping[str, str]]) -> Optional[str]:
        try:
            resp = requests.get(
                url, headers=self.browser_headers(headers), timeout=self._settings.timeout_seconds
            )
            resp.raise_for_status()
        except requests.RequestException as exc:
            self._logger.warning("Fetch failed for %s: %s", url, exc)
            return None
        self._logger.debug("Fetched %s (%s bytes)", url, len(resp.content))
        return resp.text

    def _sync_fetch_with_session(self, landing_url: str, ajax_url: str, encoding: str) -> Optional[str]:
        timeout = self._settings.timeout_seconds
        with self._session_factory() as session:
            try:
                landing = session.get(landing_url, headers=self.browser_headers(), timeout=timeout)
                landing.raise_for_status()
            except requests.RequestException as exc:
                self._logger.warning("Landing page %s failed: %s; trying %s anyway", landing_url, exc, ajax_url)

            if len(session.cookies) == 0:
                self._logger.warning("No session cookies from %s; continuing without them", landing_url)

            ajax_headers = self.browser_headers(
                {"Referer": landing_url, "X-Requested-With": "XMLHttpRequest"}
            )
            try:
                resp = session.get(ajax_url, headers=ajax_headers, timeout=timeout)
                resp.raise_for_status()
            except requests.RequestException as exc:
                self._logger.warning("Fetch failed for %s: %s", ajax_url, exc)
                return None

        # Upstream serves Latin-1 family bytes whatever the response headers say.
        try:
            return resp.content.decode(encoding, errors="replace")
        except LookupError:
            self._logger.warning("Unknown encoding %r for %s", encoding, ajax_url)
            return None
