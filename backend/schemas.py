from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, Field, validator

from quiniela.types import is_result_value


def _check_results(value: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
    for label, number in value.items():
        if number is not None and not is_result_value(number):
            raise ValueError(f"{label}: results must be 4 digits or null.")
    return value


class SnapshotResponse(BaseModel):
    fecha: str = Field(..., description="Today's date, e.g. 'Lunes 12 de Enero'.")
    fecha_ayer: str = Field(..., alias="fechaAyer")
    consultado: str = Field(..., description="Query time as 'HH:MM hs'.")
    sorteos: Dict[str, Dict[str, Optional[str]]]
    nocturnas_ayer: Dict[str, Optional[str]] = Field(..., alias="nocturnasAyer")

    @validator("sorteos")
    def validate_sorteos(cls, value: Dict[str, Dict[str, Optional[str]]]) -> Dict[str, Dict[str, Optional[str]]]:
        for slots in value.values():
            _check_results(slots)
        return value

    @validator("nocturnas_ayer")
    def validate_nocturnas(cls, value: Dict[str, Optional[str]]) -> Dict[str, Optional[str]]:
        return _check_results(value)


class ErrorResponse(BaseModel):
    error: str
