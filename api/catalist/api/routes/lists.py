from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from catalist.api.deps import get_list_service, get_session_context
from catalist.core.session import SessionContext
from catalist.schema.lists import ListSubmissionRequest, ListSummary, PersistedList
from catalist.schema.results import ContentType
from catalist.services.draft_service import DraftList, DraftValidationError
from catalist.services.list_service import ListService, PartialPersistenceError, PersistenceError

router = APIRouter()


def _draft_from_request(payload: ListSubmissionRequest) -> DraftList:
    draft = DraftList().with_metadata(
        title=payload.title,
        description=payload.description,
        category=payload.category,
        privacy=payload.privacy,
        allow_comments=payload.allow_comments,
        allow_collaboration=payload.allow_collaboration,
        tags=payload.tags,
    )
    # repeated ids keep their first occurrence
    for item in payload.items:
        draft = draft.select(item)
    return draft


@router.post("/lists", response_model=PersistedList, status_code=status.HTTP_201_CREATED)
async def create_list(
    payload: ListSubmissionRequest,
    session_ctx: SessionContext = Depends(get_session_context),
    service: ListService = Depends(get_list_service),
) -> PersistedList:
    """Commit the selected items as a new list owned by the caller."""
    try:
        submission = _draft_from_request(payload).commit()
    except DraftValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=exc.reason) from exc
    try:
        return await service.submit(session_ctx, submission)
    except PartialPersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "list_id": exc.list_id, "retry": True},
        ) from exc
    except PersistenceError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={"message": str(exc), "retry": True},
        ) from exc


@router.get("/content/{content_type}/{content_id}/lists", response_model=list[ListSummary])
async def who_added(
    content_type: ContentType,
    content_id: str,
    service: ListService = Depends(get_list_service),
) -> list[ListSummary]:
    return await service.who_added(content_id, content_type)
