from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .catalog import DEFAULT_KEY_REGIONS
from .clock import DEFAULT_TIMEZONE
from .types import Region

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


def _bool_from_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _int_from_env(value: Optional[str], default: int) -> int:
    if value is None or value == "":
        return default
    return int(value)


def _regions_from_env(value: Optional[str], default: Tuple[Region, ...]) -> Tuple[Region, ...]:
    if value is None or value.strip() == "":
        return default
    regions = []
    for key in value.split(","):
        key = key.strip().lower()
        if not key:
            continue
        try:
            regions.append(Region(key))
        except ValueError as exc:
            raise RuntimeError(f"Unknown region in QUINIELA_KEY_REGIONS: {key}") from exc
    if not regions:
        raise RuntimeError("QUINIELA_KEY_REGIONS lists no regions")
    return tuple(regions)


def _encoding_from_env(value: Optional[str], default: str) -> str:
    if value is None or value.strip() == "":
        return default
    value = value.strip()
    try:
        codecs.lookup(value)
    except LookupError as exc:
        raise RuntimeError(f"Unknown encoding in FALLBACK__ENCODING: {value}") from exc
    return value


@dataclass(frozen=True)
class HttpSettings:
    user_agent: str = DEFAULT_USER_AGENT
    accept_language: str = "es-AR,es;q=0.9,en;q=0.5"
    timeout_seconds: int = 10


@dataclass(frozen=True)
class PrimarySourceSettings:
    today_url: str = "https://www.jugandoonline.com.ar/"
    yesterday_url: str = "https://www.jugandoonline.com.ar/rHome2-Ayer.aspx"
    desktop_selector: str = "div.vista-escritorio"
    number_selector: str = "a.enlaces-numeros"


@dataclass(frozen=True)
class FallbackSourceSettings:
    enabled: bool = True
    landing_url: str = "https://www.notitimba.com/loterias/index.php"
    ajax_url: str = "https://www.notitimba.com/loterias/quinielas.php"
    encoding: str = "iso-8859-1"
    value_selector: str = "span.numero"


@dataclass(frozen=True)
class QuinielaSettings:
    timezone: str = DEFAULT_TIMEZONE
    key_regions: Tuple[Region, ...] = DEFAULT_KEY_REGIONS
    http: HttpSettings = field(default_factory=HttpSettings)
    primary: PrimarySourceSettings = field(default_factory=PrimarySourceSettings)
    fallback: FallbackSourceSettings = field(default_factory=FallbackSourceSettings)

    def copy(self, **updates) -> "QuinielaSettings":
        return replace(self, **updates)


def load_from_environment() -> QuinielaSettings:
    http_defaults = HttpSettings()
    http = HttpSettings(
        user_agent=os.getenv("HTTP__USER_AGENT", http_defaults.user_agent),
        accept_language=os.getenv("HTTP__ACCEPT_LANGUAGE", http_defaults.accept_language),
        timeout_seconds=_int_from_env(os.getenv("HTTP__TIMEOUT_SECONDS"), 10),
    )

    primary_defaults = PrimarySourceSettings()
    primary = PrimarySourceSettings(
        today_url=os.getenv("PRIMARY__TODAY_URL", primary_defaults.today_url),
        yesterday_url=os.getenv("PRIMARY__YESTERDAY_URL", primary_defaults.yesterday_url),
        desktop_selector=os.getenv("PRIMARY__DESKTOP_SELECTOR", primary_defaults.desktop_selector),
        number_selector=os.getenv("PRIMARY__NUMBER_SELECTOR", primary_defaults.number_selector),
    )

    fallback_defaults = FallbackSourceSettings()
    fallback = FallbackSourceSettings(
        enabled=_bool_from_env(os.getenv("FALLBACK__ENABLED"), True),
        landing_url=os.getenv("FALLBACK__LANDING_URL", fallback_defaults.landing_url),
        ajax_url=os.getenv("FALLBACK__AJAX_URL", fallback_defaults.ajax_url),
        encoding=_encoding_from_env(os.getenv("FALLBACK__ENCODING"), fallback_defaults.encoding),
        value_selector=os.getenv("FALLBACK__VALUE_SELECTOR", fallback_defaults.value_selector),
    )

    return QuinielaSettings(
        timezone=os.getenv("QUINIELA_TIMEZONE", DEFAULT_TIMEZONE),
        key_regions=_regions_from_env(os.getenv("QUINIELA_KEY_REGIONS"), DEFAULT_KEY_REGIONS),
        http=http,
        primary=primary,
        fallback=fallback,
    )

