from __future__ import annotations

from flask import Blueprint, current_app, jsonify
from sqlalchemy import text

from moodwave.database.db_manager import db

health_bp = Blueprint("health_bp", __name__)


@health_bp.route("/healthz")
def healthz():
    status = 200
    checks = {}

    try:
        db.session.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as exc:  # pragma: no cover - DB failure path
        status = 503
        checks["database"] = f"error: {exc}"

    catalog = current_app.extensions.get("catalog_client")
    if catalog is not None and catalog.is_configured:
        checks["catalog"] = "ok"
    else:
        checks["catalog"] = "unconfigured"

    overall = "ok" if status == 200 else "degraded"
    return jsonify({"status": overall, "checks": checks}), status
