from abc import ABC, abstractmethod
from datetime import UTC, datetime, timedelta

from recruiter.schemas.candidate import CandidateCreate, CandidateFilters, CandidateRead, CandidateUpdate
from recruiter.schemas.dashboard import DashboardStats
from recruiter.schemas.position import PositionCreate, PositionRead, PositionUpdate
from recruiter.schemas.user import UserRead, UserUpsert

IN_REVIEW = "In Review"
SHORTLISTED = "Shortlisted"


def next_timestamp(previous: datetime | None = None) -> datetime:
    """Return the current UTC time, strictly later than ``previous`` if given."""
    now = datetime.now(UTC)
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=UTC)
    return max(now, previous + timedelta(microseconds=1))


class RecordStore(ABC):
    """Owner of the user, position and candidate collections.

    Listings are ordered newest first. ``update_*`` and ``delete_*`` raise
    ``RecordNotFoundError`` for unknown ids; ``get_*`` returns ``None``.
    """

    name: str

    async def initialize(self) -> None:
        """Prepare the backend before the first request."""

    async def close(self) -> None:
        """Release backend resources at shutdown."""

    @abstractmethod
    async def ping(self) -> bool:
        """Report whether the backend can serve requests."""
        ...

    # Users

    @abstractmethod
    async def get_user(self, user_id: str) -> UserRead | None: ...

    @abstractmethod
    async def upsert_user(self, data: UserUpsert) -> UserRead:
        """Create the user or overwrite its profile, keeping ``created_at``.

        Raises ``RecordConflictError`` if another user already has the email.
        """
        ...

    # Positions

    @abstractmethod
    async def list_positions(self) -> list[PositionRead]: ...

    @abstractmethod
    async def get_position(self, position_id: int) -> PositionRead | None: ...

    @abstractmethod
    async def create_position(self, data: PositionCreate) -> PositionRead: ...

    @abstractmethod
    async def update_position(self, position_id: int, data: PositionUpdate) -> PositionRead: ...

    @abstractmethod
    async def delete_position(self, position_id: int) -> None: ...

    # Candidates

    @abstractmethod
    async def list_candidates(self, filters: CandidateFilters | None = None) -> list[CandidateRead]: ...

    @abstractmethod
    async def get_candidate(self, candidate_id: int) -> CandidateRead | None: ...

    @abstractmethod
    async def create_candidate(self, data: CandidateCreate) -> CandidateRead: ...

    @abstractmethod
    async def update_candidate(self, candidate_id: int, data: CandidateUpdate) -> CandidateRead: ...

    @abstractmethod
    async def delete_candidate(self, candidate_id: int) -> None: ...

    # Dashboard

    @abstractmethod
    async def get_dashboard_stats(self) -> DashboardStats:
        """Count positions, candidates, and candidates in review or shortlisted."""
        ...
