from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from quiniela.config import QuinielaSettings, load_from_environment


@dataclass(frozen=True)
class FlaskSettings:
    secret_key: str = "quiniela-dev-secret"
    debug: bool = False


@dataclass(frozen=True)
class AppSettings:
    flask: FlaskSettings
    quiniela: QuinielaSettings


@lru_cache(maxsize=1)
def load_settings(dotenv_path: Optional[str] = None) -> AppSettings:
    if dotenv_path:
        load_dotenv(dotenv_path)
    else:
        load_dotenv()

    flask_settings = FlaskSettings(
        secret_key=os.getenv("FLASK_SECRET_KEY", "quiniela-dev-secret"),
        debug=os.getenv("FLASK_DEBUG", "0") == "1",
    )

    return AppSettings(
        flask=flask_settings,
        quiniela=load_from_environment(),
    )
