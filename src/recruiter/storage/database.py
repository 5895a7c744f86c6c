import logging

from sqlalchemy import case, func, or_, select, text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine

from recruiter.core.database import create_session_factory
from recruiter.core.exceptions import RecordConflictError, RecordNotFoundError
from recruiter.models import Base
from recruiter.models.candidate import Candidate
from recruiter.models.position import Position
from recruiter.models.user import User
from recruiter.schemas.candidate import CandidateCreate, CandidateFilters, CandidateRead, CandidateUpdate
from recruiter.schemas.dashboard import DashboardStats
from recruiter.schemas.position import PositionCreate, PositionRead, PositionUpdate
from recruiter.schemas.user import UserRead, UserUpsert
from recruiter.storage.base import IN_REVIEW, SHORTLISTED, RecordStore, next_timestamp

logger = logging.getLogger(__name__)

# Upper bound of a PostgreSQL serial (int4) column
MAX_SERIAL_ID = 2**31 - 1


def _storable_id(record_id: int) -> bool:
    return 1 <= record_id <= MAX_SERIAL_ID


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class DatabaseRecordStore(RecordStore):
    """RecordStore backed by a relational database through SQLAlchemy's async ORM.

    Each operation runs in its own session and commits before returning.
    """

    name = "database"

    def __init__(self, engine: AsyncEngine, create_tables: bool = False) -> None:
        self.engine = engine
        self._sessions = create_session_factory(engine)
        self._create_tables = create_tables

    async def initialize(self) -> None:
        if self._create_tables:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables verified")

    async def close(self) -> None:
        await self.engine.dispose()

    async def ping(self) -> bool:
        try:
            async with self._sessions() as session:
                await session.execute(text("SELECT 1"))
        except Exception:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    # Users

    async def get_user(self, user_id: str) -> UserRead | None:
        async with self._sessions() as session:
            user = await session.get(User, user_id)
            return UserRead.model_validate(user) if user else None

    async def upsert_user(self, data: UserUpsert) -> UserRead:
        async with self._sessions() as session:
            user = await session.get(User, data.id)
            if user is None:
                now = next_timestamp()
                user = User(**data.model_dump(), created_at=now, updated_at=now)
                session.add(user)
            else:
                for field, value in data.model_dump(exclude={"id"}).items():
                    setattr(user, field, value)
                user.updated_at = next_timestamp(user.updated_at)
            try:
                await session.commit()
            except IntegrityError as e:
                raise RecordConflictError(f"Email {data.email!r} belongs to another user") from e
            await session.refresh(user)
            logger.debug("Upserted user %s", user.id)
            return UserRead.model_validate(user)

    # Positions

    async def list_positions(self) -> list[PositionRead]:
        async with self._sessions() as session:
            result = await session.execute(
                select(Position).order_by(Position.created_at.desc(), Position.id.desc())
            )
            return [PositionRead.model_validate(p) for p in result.scalars().all()]

    async def get_position(self, position_id: int) -> PositionRead | None:
        if not _storable_id(position_id):
            return None
        async with self._sessions() as session:
            position = await session.get(Position, position_id)
            return PositionRead.model_validate(position) if position else None

    async def create_position(self, data: PositionCreate) -> PositionRead:
        async with self._sessions() as session:
            now = next_timestamp()
            position = Position(**data.model_dump(mode="json"), created_at=now, updated_at=now)
            session.add(position)
            await session.commit()
            await session.refresh(position)
            logger.info("Created position %d (%s)", position.id, position.title)
            return PositionRead.model_validate(position)

    async def update_position(self, position_id: int, data: PositionUpdate) -> PositionRead:
        if not _storable_id(position_id):
            raise RecordNotFoundError("Position", position_id)
        async with self._sessions() as session:
            position = await session.get(Position, position_id)
            if position is None:
                raise RecordNotFoundError("Position", position_id)
            for field, value in data.model_dump(mode="json", exclude_unset=True).items():
                setattr(position, field, value)
            position.updated_at = next_timestamp(position.updated_at)
            await session.commit()
            await session.refresh(position)
            logger.info("Updated position %d", position_id)
            return PositionRead.model_validate(position)

    async def delete_position(self, position_id: int) -> None:
        if not _storable_id(position_id):
            raise RecordNotFoundError("Position", position_id)
        async with self._sessions() as session:
            position = await session.get(Position, position_id)
            if position is None:
                raise RecordNotFoundError("Position", position_id)
            await session.delete(position)
            await session.commit()
        logger.info("Deleted position %d", position_id)

    # Candidates

    async def list_candidates(self, filters: CandidateFilters | None = None) -> list[CandidateRead]:
        query = select(Candidate)
        if filters is not None:
            if filters.position:
                query = query.where(Candidate.position_applied == filters.position)
            if filters.status:
                query = query.where(Candidate.status == filters.status)
            if filters.search:
                pattern = f"%{_escape_like(filters.search)}%"
                query = query.where(
                    or_(
                        Candidate.name.ilike(pattern, escape="\\"),
                        Candidate.email.ilike(pattern, escape="\\"),
                    )
                )
        query = query.order_by(Candidate.created_at.desc(), Candidate.id.desc())
        async with self._sessions() as session:
            result = await session.execute(query)
            return [CandidateRead.model_validate(c) for c in result.scalars().all()]

    async def get_candidate(self, candidate_id: int) -> CandidateRead | None:
        if not _storable_id(candidate_id):
            return None
        async with self._sessions() as session:
            candidate = await session.get(Candidate, candidate_id)
            return CandidateRead.model_validate(candidate) if candidate else None

    async def create_candidate(self, data: CandidateCreate) -> CandidateRead:
        async with self._sessions() as session:
            now = next_timestamp()
            candidate = Candidate(**data.model_dump(mode="json"), created_at=now, updated_at=now)
            session.add(candidate)
            await session.commit()
            await session.refresh(candidate)
            logger.info("Created candidate %d for %r", candidate.id, candidate.position_applied)
            return CandidateRead.model_validate(candidate)

    async def update_candidate(self, candidate_id: int, data: CandidateUpdate) -> CandidateRead:
        if not _storable_id(candidate_id):
            raise RecordNotFoundError("Candidate", candidate_id)
        async with self._sessions() as session:
            candidate = await session.get(Candidate, candidate_id)
            if candidate is None:
                raise RecordNotFoundError("Candidate", candidate_id)
            for field, value in data.model_dump(mode="json", exclude_unset=True).items():
                setattr(candidate, field, value)
            candidate.updated_at = next_timestamp(candidate.updated_at)
            await session.commit()
            await session.refresh(candidate)
            logger.info("Updated candidate %d", candidate_id)
            return CandidateRead.model_validate(candidate)

    async def delete_candidate(self, candidate_id: int) -> None:
        if not _storable_id(candidate_id):
            raise RecordNotFoundError("Candidate", candidate_id)
        async with self._sessions() as session:
            candidate = await session.get(Candidate, candidate_id)
            if candidate is None:
                raise RecordNotFoundError("Candidate", candidate_id)
            await session.delete(candidate)
            await session.commit()
        logger.info("Deleted candidate %d", candidate_id)

    # Dashboard

    async def get_dashboard_stats(self) -> DashboardStats:
        positions_query = select(func.count()).select_from(Position)
        candidates_query = select(
            func.count(Candidate.id),
            func.count(case((Candidate.status == IN_REVIEW, 1))),
            func.count(case((Candidate.status == SHORTLISTED, 1))),
        )
        async with self._sessions() as session:
            total_positions = (await session.execute(positions_query)).scalar_one()
            total, in_review, shortlisted = (await session.execute(candidates_query)).one()
        return DashboardStats(
            total_positions=total_positions,
            total_candidates=total,
            in_review=in_review,
            shortlisted=shortlisted,
        )
