from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple

from .types import Region, TimeSlot


@dataclass(frozen=True)
class RegionInfo:
    region: Region
    label: str
    aliases: Tuple[str, ...]
    container_class: str
    container_id: str
    # Generic qualifiers ("prov.", "bs. as.") also found in other regions' labels.
    weak_aliases: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SlotInfo:
    slot: TimeSlot
    label: str


@dataclass(frozen=True)
class Deadline:
    """Expected publication time of a draw, as local clock time plus grace."""

    hour: int
    minute: int
    grace_minutes: int = 0

    @property
    def cutoff_minutes(self) -> int:
        return self.hour * 60 + self.minute + self.grace_minutes


def _repair_mojibake(text: str) -> str:
    # UTF-8 bytes read as Latin-1 turn "ó" into "Ã³".
    if "Ã" not in text and "Â" not in text:
        return text
    try:
        return text.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return text


def fold_label(text: str) -> str:
    """Lowercase, accent-free, whitespace-collapsed form used for matching."""
    text = _repair_mojibake(text)
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    stripped = stripped.replace("�", "").replace("?", "")
    return " ".join(stripped.lower().split())


@dataclass(frozen=True)
class Catalog:
    """Regions, slots and deadlines shared read-only by every component."""

    regions: Tuple[RegionInfo, ...]
    slots: Tuple[SlotInfo, ...]
    deadlines: Mapping[TimeSlot, Deadline]
    key_regions: Tuple[Region, ...]
    _folded_aliases: Tuple[Tuple[Region, Tuple[str, ...]], ...] = field(
        init=False, repr=False, compare=False
    )
    _folded_weak_aliases: Tuple[Tuple[Region, Tuple[str, ...]], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        folded = tuple(
            (info.region, tuple(fold_label(alias) for alias in info.aliases)) for info in self.regions
        )
        weak = tuple(
            (info.region, tuple(fold_label(alias) for alias in info.weak_aliases)) for info in self.regions
        )
        object.__setattr__(self, "_folded_aliases", folded)
        object.__setattr__(self, "_folded_weak_aliases", weak)

    @property
    def slot_order(self) -> Tuple[TimeSlot, ...]:
        return tuple(info.slot for info in self.slots)

    @property
    def region_order(self) -> Tuple[Region, ...]:
        return tuple(info.region for info in self.regions)

    @property
    def late_night(self) -> TimeSlot:
        return self.slots[-1].slot

    def deadline_slots(self) -> Tuple[TimeSlot, ...]:
        return tuple(slot for slot in self.slot_order if slot in self.deadlines)

    def match_region(self, label: str) -> Optional[Region]:
        """Region named by `label`, or None.

        The longest matching alias wins, so "Santa Fe" beats "ciudad" in
        "Ciudad de Santa Fe". Weak aliases are only consulted when no regular
        alias matches: "Prov. de Entre Rios" is Entre Rios.
        """
        folded = fold_label(label)
        if not folded:
            return None
        for table in (self._folded_aliases, self._folded_weak_aliases):
            best: Optional[Region] = None
            best_length = 0
            for region, aliases in table:
                for alias in aliases:
                    if alias and alias in folded and len(alias) > best_length:
                        best, best_length = region, len(alias)
            if best is not None:
                return best
        return None

    def with_key_regions(self, regions: Iterable[Region]) -> "Catalog":
        return replace(self, key_regions=tuple(regions))


DEFAULT_REGIONS: Tuple[RegionInfo, ...] = (
    RegionInfo(
        Region.PROVINCIA,
        "Provincia",
        ("provincia de buenos aires", "provincia de bs. as.", "prov. de bs. as.", "pcia. de bs. as.", "pcia. bs. as."),
        "quiniela-provincia",
        "ayer-provincia",
        weak_aliases=("provincia", "prov.", "pcia", "buenos aires", "bs. as.", "bs.as."),
    ),
    RegionInfo(
        Region.CIUDAD,
        "Ciudad",
        ("ciudad", "nacional", "caba"),
        "quiniela-ciudad",
        "ayer-ciudad",
    ),
    RegionInfo(
        Region.CORDOBA,
        "Cordoba",
        ("córdoba", "crdoba"),
        "quiniela-cordoba",
        "ayer-cordoba",
    ),
    RegionInfo(
        Region.SANTA_FE,
        "Santa Fe",
        ("santa fe", "santafe"),
        "quiniela-santafe",
        "ayer-santafe",
    ),
    RegionInfo(
        Region.ENTRE_RIOS,
        "Entre Rios",
        ("entre ríos", "entrerios", "entre ros"),
        "quiniela-entrerios",
        "ayer-entrerios",
    ),
    RegionInfo(
        Region.MONTEVIDEO,
        "Montevideo",
        ("montevideo", "uruguay"),
        "quiniela-montevideo",
        "ayer-montevideo",
    ),
)

DEFAULT_SLOTS: Tuple[SlotInfo, ...] = (
    SlotInfo(TimeSlot.PREVIA, "Previa"),
    SlotInfo(TimeSlot.PRIMERA, "Primera"),
    SlotInfo(TimeSlot.MATUTINA, "Matutina"),
    SlotInfo(TimeSlot.VESPERTINA, "Vespertina"),
    SlotInfo(TimeSlot.NOCTURNA, "Nocturna"),
)

# Draw time plus the delay before results are usually published.
# Nocturna has no entry: it never triggers a fallback by deadline.
DEFAULT_DEADLINES: Mapping[TimeSlot, Deadline] = MappingProxyType(
    {
        TimeSlot.PREVIA: Deadline(10, 15, grace_minutes=10),
        TimeSlot.PRIMERA: Deadline(12, 0, grace_minutes=17),
        TimeSlot.MATUTINA: Deadline(15, 0, grace_minutes=17),
        TimeSlot.VESPERTINA: Deadline(18, 0, grace_minutes=17),
    }
)

DEFAULT_KEY_REGIONS: Tuple[Region, ...] = (Region.PROVINCIA, Region.CIUDAD)

DEFAULT_CATALOG = Catalog(
    regions=DEFAULT_REGIONS,
    slots=DEFAULT_SLOTS,
    deadlines=DEFAULT_DEADLINES,
    key_regions=DEFAULT_KEY_REGIONS,
)
