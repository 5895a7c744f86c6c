import asyncio
import itertools
import logging

from recruiter.core.exceptions import RecordConflictError, RecordNotFoundError
from recruiter.schemas.candidate import CandidateCreate, CandidateFilters, CandidateRead, CandidateUpdate
from recruiter.schemas.dashboard import DashboardStats
from recruiter.schemas.position import PositionCreate, PositionRead, PositionUpdate
from recruiter.schemas.user import UserRead, UserUpsert
from recruiter.storage.base import IN_REVIEW, SHORTLISTED, RecordStore, next_timestamp

logger = logging.getLogger(__name__)

SAMPLE_POSITION = PositionCreate(
    title="Senior Frontend Developer",
    department="Engineering",
    location="Remote",
    description="We're looking for a Senior Frontend Developer to join our engineering team.",
)


def _newest_first(records):
    return sorted(records, key=lambda r: (r.created_at, r.id), reverse=True)


class InMemoryRecordStore(RecordStore):
    """RecordStore backed by dicts; contents live only as long as the process."""

    name = "memory"

    def __init__(self, seed_sample_data: bool = False) -> None:
        self._users: dict[str, UserRead] = {}
        self._positions: dict[int, PositionRead] = {}
        self._candidates: dict[int, CandidateRead] = {}
        self._position_ids = itertools.count(1)
        self._candidate_ids = itertools.count(1)
        self._lock = asyncio.Lock()
        self._seed = seed_sample_data

    async def initialize(self) -> None:
        if self._seed and not self._positions:
            position = await self.create_position(SAMPLE_POSITION)
            logger.info("Seeded sample position %d (%s)", position.id, position.title)

    async def ping(self) -> bool:
        return True

    # Users

    async def get_user(self, user_id: str) -> UserRead | None:
        return self._users.get(user_id)

    async def upsert_user(self, data: UserUpsert) -> UserRead:
        async with self._lock:
            existing = self._users.get(data.id)
            if data.email and any(
                u.email == data.email and u.id != data.id for u in self._users.values()
            ):
                raise RecordConflictError(f"Email {data.email!r} belongs to another user")
            now = next_timestamp(existing.updated_at if existing else None)
            user = UserRead(
                **data.model_dump(),
                created_at=existing.created_at if existing else now,
                updated_at=now,
            )
            self._users[user.id] = user
        logger.debug("Upserted user %s", user.id)
        return user

    # Positions

    async def list_positions(self) -> list[PositionRead]:
        return _newest_first(list(self._positions.values()))

    async def get_position(self, position_id: int) -> PositionRead | None:
        return self._positions.get(position_id)

    async def create_position(self, data: PositionCreate) -> PositionRead:
        async with self._lock:
            now = next_timestamp()
            position = PositionRead(
                id=next(self._position_ids),
                **data.model_dump(mode="json"),
                created_at=now,
                updated_at=now,
            )
            self._positions[position.id] = position
        logger.info("Created position %d (%s)", position.id, position.title)
        return position

    async def update_position(self, position_id: int, data: PositionUpdate) -> PositionRead:
        async with self._lock:
            existing = self._positions.get(position_id)
            if existing is None:
                raise RecordNotFoundError("Position", position_id)
            changes = data.model_dump(mode="json", exclude_unset=True)
            changes["updated_at"] = next_timestamp(existing.updated_at)
            position = existing.model_copy(update=changes)
            self._positions[position_id] = position
        logger.info("Updated position %d", position_id)
        return position

    async def delete_position(self, position_id: int) -> None:
        async with self._lock:
            if self._positions.pop(position_id, None) is None:
                raise RecordNotFoundError("Position", position_id)
        logger.info("Deleted position %d", position_id)

    # Candidates

    async def list_candidates(self, filters: CandidateFilters | None = None) -> list[CandidateRead]:
        candidates = list(self._candidates.values())
        if filters is not None:
            candidates = [c for c in candidates if filters.matches(c)]
        return _newest_first(candidates)

    async def get_candidate(self, candidate_id: int) -> CandidateRead | None:
        return self._candidates.get(candidate_id)

    async def create_candidate(self, data: CandidateCreate) -> CandidateRead:
        async with self._lock:
            now = next_timestamp()
            candidate = CandidateRead(
                id=next(self._candidate_ids),
                **data.model_dump(mode="json"),
                created_at=now,
                updated_at=now,
            )
            self._candidates[candidate.id] = candidate
        logger.info("Created candidate %d for %r", candidate.id, candidate.position_applied)
        return candidate

    async def update_candidate(self, candidate_id: int, data: CandidateUpdate) -> CandidateRead:
        async with self._lock:
            existing = self._candidates.get(candidate_id)
            if existing is None:
                raise RecordNotFoundError("Candidate", candidate_id)
            changes = data.model_dump(mode="json", exclude_unset=True)
            changes["updated_at"] = next_timestamp(existing.updated_at)
            candidate = existing.model_copy(update=changes)
            self._candidates[candidate_id] = candidate
        logger.info("Updated candidate %d", candidate_id)
        return candidate

    async def delete_candidate(self, candidate_id: int) -> None:
        async with self._lock:
            if self._candidates.pop(candidate_id, None) is None:
                raise RecordNotFoundError("Candidate", candidate_id)
        logger.info("Deleted candidate %d", candidate_id)

    # Dashboard

    async def get_dashboard_stats(self) -> DashboardStats:
        candidates = list(self._candidates.values())
        return DashboardStats(
            total_positions=len(self._positions),
            total_candidates=len(candidates),
            in_review=sum(1 for c in candidates if c.status == IN_REVIEW),
            shortlisted=sum(1 for c in candidates if c.status == SHORTLISTED),
        )
