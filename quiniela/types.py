from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

RESULT_PATTERN = re.compile(r"\d{4}")


class Region(str, Enum):
    PROVINCIA = "provincia"
    CIUDAD = "ciudad"
    CORDOBA = "cordoba"
    SANTA_FE = "santa_fe"
    ENTRE_RIOS = "entre_rios"
    MONTEVIDEO = "montevideo"


class TimeSlot(str, Enum):
    PREVIA = "previa"
    PRIMERA = "primera"
    MATUTINA = "matutina"
    VESPERTINA = "vespertina"
    NOCTURNA = "nocturna"


def is_result_value(text: Optional[str]) -> bool:
    return text is not None and RESULT_PATTERN.fullmatch(text) is not None


ResultKey = Tuple[TimeSlot, Region]


class ResultSet:
    """Draw results keyed by (slot, region).

    A pair that was never stored is absent; there is no zero or placeholder
    value for "not drawn yet".
    """

    def __init__(self, values: Optional[Mapping[ResultKey, str]] = None) -> None:
        self._values: Dict[ResultKey, str] = {}
        for (slot, region), value in (values or {}).items():
            self.set(slot, region, value)

    def get(self, slot: TimeSlot, region: Region) -> Optional[str]:
        return self._values.get((slot, region))

    def has(self, slot: TimeSlot, region: Region) -> bool:
        return (slot, region) in self._values

    def set(self, slot: TimeSlot, region: Region, value: str) -> None:
        if not is_result_value(value):
            raise ValueError(f"Result for {region.value}/{slot.value} must be 4 digits, got {value!r}")
        self._values[(slot, region)] = value

    def copy(self) -> "ResultSet":
        return ResultSet(self._values)

    def is_empty(self) -> bool:
        return not self._values

    def items(self) -> Iterator[Tuple[ResultKey, str]]:
        return iter(self._values.items())

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        pairs = ", ".join(
            f"{slot.value}/{region.value}={value}" for (slot, region), value in sorted(self._values.items())
        )
        return f"ResultSet({pairs})"


@dataclass(frozen=True)
class Snapshot:
    """Display-ready results for one request."""

    fecha: str
    fecha_ayer: str
    consultado: str
    sorteos: Mapping[str, Mapping[str, Optional[str]]]
    nocturnas_ayer: Mapping[str, Optional[str]]

    def as_payload(self) -> Dict[str, Any]:
        return {
            "fecha": self.fecha,
            "fechaAyer": self.fecha_ayer,
            "consultado": self.consultado,
            "sorteos": {region: dict(slots) for region, slots in self.sorteos.items()},
            "nocturnasAyer": dict(self.nocturnas_ayer),
        }
