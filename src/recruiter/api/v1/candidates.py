from fastapi import APIRouter, Depends, Query, status

from recruiter.api.deps import get_store, require_user
from recruiter.core.exceptions import NotFoundError, RecordNotFoundError
from recruiter.schemas.candidate import (
    CandidateCreate,
    CandidateFilters,
    CandidateRead,
    CandidateUpdate,
)
from recruiter.storage.base import RecordStore

router = APIRouter(prefix="/candidates", tags=["candidates"], dependencies=[Depends(require_user)])


@router.get("", response_model=list[CandidateRead])
async def list_candidates(
    position: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    search: str | None = Query(None),
    store: RecordStore = Depends(get_store),
) -> list[CandidateRead]:
    filters = CandidateFilters(position=position, status=status_filter, search=search)
    return await store.list_candidates(filters)


@router.post("", response_model=CandidateRead, status_code=status.HTTP_201_CREATED)
async def create_candidate(
    data: CandidateCreate,
    store: RecordStore = Depends(get_store),
) -> CandidateRead:
    return await store.create_candidate(data)


@router.put("/{candidate_id}", response_model=CandidateRead)
async def update_candidate(
    candidate_id: int,
    data: CandidateUpdate,
    store: RecordStore = Depends(get_store),
) -> CandidateRead:
    try:
        return await store.update_candidate(candidate_id, data)
    except RecordNotFoundError as e:
        raise NotFoundError("Candidate", candidate_id) from e


@router.delete("/{candidate_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_candidate(
    candidate_id: int,
    store: RecordStore = Depends(get_store),
) -> None:
    try:
        await store.delete_candidate(candidate_id)
    except RecordNotFoundError as e:
        raise NotFoundError("Candidate", candidate_id) from e
