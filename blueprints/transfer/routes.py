# blueprints/transfer/routes.py
from __future__ import annotations
import json

from flask import Response, current_app, jsonify, request

from . import bp
from .services import export_state, import_state
from extensions import db

@bp.get("/export")
def api_export():
    filename = current_app.config.get("EXPORT_FILENAME", "resource-planner-export.json")
    body = json.dumps(export_state(db.session), ensure_ascii=False, indent=2)
    return Response(
        body,
        mimetype="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )

@bp.post("/import")
def api_import():
    # accepts the JSON body directly or an uploaded export file under "file"
    f = request.files.get("file")
    if f:
        try:
            payload = json.loads(f.read().decode("utf-8-sig"))
        except ValueError:
            payload = None
    else:
        payload = request.get_json(silent=True)
    # only a JSON object is a snapshot
    if not isinstance(payload, dict):
        return jsonify({"error": "invalid_json", "code": "BAD_REQUEST"}), 400
    import_state(db.session, payload)
    return "", 204
