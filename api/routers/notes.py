"""Notes Router - note CRUD and listing.

Listing accepts q (title/content search), tag, sort (created_at | updated_at),
order, page and limit, with the same permissive parsing as tasks.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from api.dependencies import get_current_user, get_note_store, serialize_note
from api.models import NoteCreateRequest, NoteUpdateRequest
from daily_dashboard.analysis import NoteQuery, query_notes
from daily_dashboard.errors import ValidationError
from daily_dashboard.note_store import NoteStore

# Mounted at /api/v1/notes
router = APIRouter()


@router.get("")
def list_notes(
    q: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    sort: Optional[str] = Query(None),
    order: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    user: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> list:
    params = NoteQuery.from_params({
        "q": q, "tag": tag, "sort": sort, "order": order, "page": page, "limit": limit,
    })
    return [serialize_note(note) for note in query_notes(store.list_notes(user), params)]


@router.post("")
def create_note(
    request: NoteCreateRequest,
    user: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> dict:
    try:
        note = store.create_note(user, request.to_domain())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return serialize_note(note)


@router.get("/{note_id}")
def get_note(
    note_id: str,
    user: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> dict:
    note = store.get_note(user, note_id)
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found.")
    return serialize_note(note)


@router.patch("/{note_id}")
def update_note(
    note_id: str,
    request: NoteUpdateRequest,
    user: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> dict:
    try:
        note = store.update_note(user, note_id, request.to_domain())
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    if note is None:
        raise HTTPException(status_code=404, detail="Note not found.")
    return serialize_note(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_note(
    note_id: str,
    user: str = Depends(get_current_user),
    store: NoteStore = Depends(get_note_store),
) -> Response:
    if not store.delete_note(user, note_id):
        raise HTTPException(status_code=404, detail="Note not found.")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
