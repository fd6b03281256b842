"""Export API: downloads of entries and moods."""

from __future__ import annotations

from flask import Blueprint, Response
from flask_jwt_extended import current_user

from ventdiary.core.auth.guard import protect
from ventdiary.core.utils.validation import load_args
from ventdiary.domains.export.services.export_service import (
    ExportFile,
    ExportQuery,
    export_entries,
    export_moods,
)

export_api_bp = Blueprint("export_api", __name__)


def _attachment(export: ExportFile) -> Response:
    return Response(
        export.body,
        status=200,
        mimetype=export.mimetype,
        headers={"Content-Disposition": f"attachment; filename={export.filename}"},
    )


@export_api_bp.get("/entries")
@protect
def export_journal_entries():
    params = load_args(ExportQuery)
    return _attachment(export_entries(current_user.id, params))


@export_api_bp.get("/moods")
@protect
def export_mood_data():
    params = load_args(ExportQuery)
    return _attachment(export_moods(current_user.id, params))
