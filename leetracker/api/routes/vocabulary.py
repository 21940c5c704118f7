"""Reference vocabulary routes (tags, languages, difficulties).

The three resources share one shape, so their routers are built by
`build_vocabulary_router`.
"""

from typing import Type
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from leetracker.api.request_models import DifficultyRequest, NameRequest
from leetracker.api.responses import api_response
from leetracker.database.database import get_db
from leetracker.database.vocabulary_repository import (
    DifficultyRepository,
    LanguageRepository,
    TagRepository,
    VocabularyRepository,
)
from leetracker.errors import NotFoundError
from leetracker.models.constants import DEFAULT_POPULAR_LIMIT


def build_vocabulary_router(
    prefix: str,
    repository_cls: Type[VocabularyRepository],
    request_model,
    field: str,
) -> APIRouter:
    """Build list / popular / get / create / update / delete routes for one vocabulary.

    Args:
        prefix: URL prefix, e.g. "/tags"
        repository_cls: Repository class for the vocabulary
        request_model: Body model for create and update
        field: Attribute of `request_model` holding the name
    """
    label = repository_cls.label
    plural = f"{label}s" if not label.endswith("y") else f"{label[:-1]}ies"
    router = APIRouter(prefix=prefix, tags=[plural])

    @router.get("")
    def list_entries(db: Session = Depends(get_db)):
        entries = repository_cls(db).list_all()
        return api_response(entries, f"{plural} retrieved successfully")

    @router.get("/popular")
    def popular_entries(limit: int = Query(DEFAULT_POPULAR_LIMIT, ge=1), db: Session = Depends(get_db)):
        entries = repository_cls(db).popular(limit)
        return api_response(entries, f"Popular {plural.lower()} retrieved successfully")

    @router.get("/{entry_id}")
    def get_entry(entry_id: int, db: Session = Depends(get_db)):
        entry = repository_cls(db).get(entry_id)
        if not entry:
            raise NotFoundError(f"{label} not found")
        return api_response(entry, f"{label} retrieved successfully")

    @router.post("")
    def create_entry(request: request_model, db: Session = Depends(get_db)):
        entry = repository_cls(db).create(getattr(request, field))
        return api_response(entry, f"{label} created successfully", status_code=201)

    @router.put("/{entry_id}")
    def update_entry(entry_id: int, request: request_model, db: Session = Depends(get_db)):
        entry = repository_cls(db).update(entry_id, getattr(request, field))
        if not entry:
            raise NotFoundError(f"{label} not found")
        return api_response(entry, f"{label} updated successfully")

    @router.delete("/{entry_id}")
    def delete_entry(entry_id: int, db: Session = Depends(get_db)):
        if not repository_cls(db).delete(entry_id):
            raise NotFoundError(f"{label} not found")
        return api_response(None, f"{label} deleted successfully")

    return router


tags_router = build_vocabulary_router("/tags", TagRepository, NameRequest, "name")
languages_router = build_vocabulary_router("/languages", LanguageRepository, NameRequest, "name")
difficulties_router = build_vocabulary_router("/difficulties", DifficultyRepository, DifficultyRequest, "level")


@difficulties_router.post("/initialize")
def initialize_difficulties(db: Session = Depends(get_db)):
    """Create whichever of Easy, Medium and Hard are missing."""
    created = DifficultyRepository(db).initialize_defaults()
    if not created:
        return api_response([], "Difficulties already initialized")
    return api_response(created, "Difficulties initialized successfully", status_code=201)
