"""
app/api/routers/bookmarks_router.py

Bookmark management and report generation.

GET    /bookmarks/{role}?term=&category=
POST   /bookmarks/{role}
POST   /bookmarks/{role}/{bookmark_id}/star
DELETE /bookmarks/{role}/{bookmark_id}
POST   /bookmarks/{role}/export
POST   /bookmarks/{role}/import
POST   /reports
POST   /reports/export
"""

from __future__ import annotations

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from app.api.dependencies import (
    get_bookmark_repository,
    get_report_generator,
    validate_role,
)
from reporting.bookmarks import (
    ALL_CATEGORIES,
    BookmarkDraft,
    BookmarkedInteraction,
    BookmarkRepository,
)
from reporting.report import Report, ReportGenerator, ReportType, export_filename, export_report

logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookmarks"])


class BookmarkSelection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    bookmark_ids: list[str] = Field(default_factory=list)


class ReportRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    role: str
    bookmark_ids: list[str]
    title: str = ""
    description: str = ""
    report_type: ReportType = "executive"


def _not_found(bookmark_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Bookmark '{bookmark_id}' not found.",
    )


def _json_download(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# ---------------------------------------------------------------------------
# Bookmarks
# ---------------------------------------------------------------------------


@router.get("/bookmarks/{role}", response_model=list[BookmarkedInteraction])
def list_bookmarks(
    role: str = Depends(validate_role),
    term: str = Query(default=""),
    category: str = Query(default=ALL_CATEGORIES),
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> list[BookmarkedInteraction]:
    return repository.search(role, term=term, category=category)


@router.post(
    "/bookmarks/{role}",
    response_model=BookmarkedInteraction,
    status_code=status.HTTP_201_CREATED,
)
def add_bookmark(
    draft: BookmarkDraft,
    role: str = Depends(validate_role),
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> BookmarkedInteraction:
    return repository.add(role, draft)


@router.post("/bookmarks/{role}/export")
def export_bookmarks(
    selection: BookmarkSelection,
    role: str = Depends(validate_role),
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> Response:
    content = repository.export_json(role, selection.bookmark_ids)
    return _json_download(content, f"bookmarks_{role}_{date.today().isoformat()}.json")


@router.post("/bookmarks/{role}/import", response_model=list[BookmarkedInteraction])
async def import_bookmarks(
    request: Request,
    role: str = Depends(validate_role),
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> list[BookmarkedInteraction]:
    """Body is a JSON array as produced by the export endpoint."""
    payload = await request.body()
    try:
        return repository.import_json(role, payload)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid bookmark payload: {exc.error_count()} error(s).",
        ) from exc


@router.post("/bookmarks/{role}/{bookmark_id}/star", response_model=BookmarkedInteraction)
def toggle_star(
    bookmark_id: str,
    role: str = Depends(validate_role),
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> BookmarkedInteraction:
    updated = repository.toggle_star(role, bookmark_id)
    if updated is None:
        raise _not_found(bookmark_id)
    return updated


@router.delete("/bookmarks/{role}/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_bookmark(
    bookmark_id: str,
    role: str = Depends(validate_role),
    repository: BookmarkRepository = Depends(get_bookmark_repository),
) -> Response:
    if not repository.delete(role, bookmark_id):
        raise _not_found(bookmark_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Reports
# ---------------------------------------------------------------------------


def _build_report(
    body: ReportRequest,
    repository: BookmarkRepository,
    generator: ReportGenerator,
) -> Report:
    role = validate_role(body.role)
    bookmarks = repository.select(role, body.bookmark_ids)
    if not bookmarks:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Select at least one existing bookmark to build a report.",
        )
    report = generator.generate(
        bookmarks,
        title=body.title,
        description=body.description,
        report_type=body.report_type,
    )
    logger.info(
        "Report %s generated role=%s bookmarks=%d type=%s",
        report.id,
        role,
        len(bookmarks),
        report.type,
    )
    return report


@router.post("/reports", response_model=Report)
def create_report(
    body: ReportRequest,
    repository: BookmarkRepository = Depends(get_bookmark_repository),
    generator: ReportGenerator = Depends(get_report_generator),
) -> Report:
    return _build_report(body, repository, generator)


@router.post("/reports/export")
def export_report_file(
    body: ReportRequest,
    repository: BookmarkRepository = Depends(get_bookmark_repository),
    generator: ReportGenerator = Depends(get_report_generator),
) -> Response:
    report = _build_report(body, repository, generator)
    return _json_download(export_report(report), export_filename(report))
