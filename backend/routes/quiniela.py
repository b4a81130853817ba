from __future__ import annotations

import asyncio

from flask import Blueprint, current_app, jsonify

from quiniela.pipeline import QuinielaPipeline
from quiniela.service import build_pipeline

from ..config import load_settings
from ..schemas import ErrorResponse, SnapshotResponse

bp = Blueprint("quiniela", __name__)


def get_pipeline() -> QuinielaPipeline:
    settings = load_settings()
    return build_pipeline(settings.quiniela)


@bp.get("/quiniela")
def get_quiniela():
    try:
        pipeline = get_pipeline()
        snapshot = asyncio.run(pipeline.snapshot())
        payload = SnapshotResponse(**snapshot.as_payload())
    except Exception as exc:
        current_app.logger.exception("Quiniela snapshot failed: %s", exc)
        return jsonify(ErrorResponse(error="Error quiniela").dict()), 500

    response = jsonify(payload.dict(by_alias=True))
    response.headers["Cache-Control"] = "no-store"
    return response
