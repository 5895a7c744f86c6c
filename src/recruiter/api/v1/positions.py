from fastapi import APIRouter, Depends, status

from recruiter.api.deps import get_store, require_user
from recruiter.core.exceptions import NotFoundError, RecordNotFoundError
from recruiter.schemas.position import PositionCreate, PositionRead, PositionUpdate
from recruiter.storage.base import RecordStore

router = APIRouter(prefix="/positions", tags=["positions"], dependencies=[Depends(require_user)])


@router.get("", response_model=list[PositionRead])
async def list_positions(store: RecordStore = Depends(get_store)) -> list[PositionRead]:
    return await store.list_positions()


@router.post("", response_model=PositionRead, status_code=status.HTTP_201_CREATED)
async def create_position(
    data: PositionCreate,
    store: RecordStore = Depends(get_store),
) -> PositionRead:
    return await store.create_position(data)


@router.put("/{position_id}", response_model=PositionRead)
async def update_position(
    position_id: int,
    data: PositionUpdate,
    store: RecordStore = Depends(get_store),
) -> PositionRead:
    try:
        return await store.update_position(position_id, data)
    except RecordNotFoundError as e:
        raise NotFoundError("Position", position_id) from e


@router.delete("/{position_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_position(
    position_id: int,
    store: RecordStore = Depends(get_store),
) -> None:
    try:
        await store.delete_position(position_id)
    except RecordNotFoundError as e:
        raise NotFoundError("Position", position_id) from e
