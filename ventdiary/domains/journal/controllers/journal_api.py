"""Journal JSON API."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import current_user

from ventdiary.core.auth.guard import protect
from ventdiary.core.utils.pagination import pagination_meta
from ventdiary.core.utils.responses import success
from ventdiary.core.utils.validation import load_args, load_json
from ventdiary.domains.journal.mappers import map_entry
from ventdiary.domains.journal.schemas.journal_schemas import (
    JournalEntryCreate,
    JournalEntryListFilter,
    JournalEntryUpdate,
)
from ventdiary.domains.journal.services import journal_service

journal_api_bp = Blueprint("journal_api", __name__)


@journal_api_bp.get("")
@protect
def list_journal():
    filters = load_args(JournalEntryListFilter)
    result = journal_service.list_entries(current_user.id, filters)
    entries = [map_entry(e) for e in result["items"]]
    return success({"entries": entries}, results=len(entries), pagination=pagination_meta(result))


@journal_api_bp.get("/categories")
@protect
def list_categories():
    return success({"categories": journal_service.list_categories(current_user.id)})


@journal_api_bp.get("/<int:entry_id>")
@protect
def get_entry(entry_id: int):
    entry = journal_service.get_entry(current_user.id, entry_id)
    return success({"entry": map_entry(entry)})


@journal_api_bp.post("")
@protect
def create_journal_entry():
    data = load_json(JournalEntryCreate)
    entry = journal_service.create_entry(current_user.id, data)
    return success({"entry": map_entry(entry)}, 201)


@journal_api_bp.patch("/<int:entry_id>")
@protect
def update_journal_entry(entry_id: int):
    data = load_json(JournalEntryUpdate)
    entry = journal_service.update_entry(current_user.id, entry_id, data)
    return success({"entry": map_entry(entry)})


@journal_api_bp.delete("/<int:entry_id>")
@protect
def delete_journal_entry(entry_id: int):
    journal_service.delete_entry(current_user.id, entry_id)
    return "", 204


@journal_api_bp.post("/<int:entry_id>/restore")
@protect
def restore_journal_entry(entry_id: int):
    entry = journal_service.restore_entry(current_user.id, entry_id)
    return success({"entry": map_entry(entry)})
