"""Search JSON API."""

from __future__ import annotations

from flask import Blueprint
from flask_jwt_extended import current_user

from ventdiary.core.auth.guard import protect
from ventdiary.core.utils.pagination import pagination_meta
from ventdiary.core.utils.responses import success
from ventdiary.core.utils.validation import load_args
from ventdiary.domains.journal.mappers import map_entry
from ventdiary.domains.search.services.search_service import SearchQuery, search_entries

search_api_bp = Blueprint("search_api", __name__)


@search_api_bp.get("")
@protect
def search():
    params = load_args(SearchQuery)
    result = search_entries(current_user.id, params)
    entries = [map_entry(e) for e in result["items"]]
    return success({"entries": entries}, results=len(entries), pagination=pagination_meta(result))
