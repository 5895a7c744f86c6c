from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from recruiter.models.base import Base, SerialPrimaryKeyMixin, TimestampMixin


class Candidate(SerialPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "candidates"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str] = mapped_column(String(50), nullable=False)
    resume: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    # Not a foreign key: deleting a position leaves the reference dangling
    position_id: Mapped[int | None] = mapped_column(nullable=True, index=True)
    position_applied: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="New", server_default="New", index=True
    )

    def __repr__(self) -> str:
        return f"<Candidate {self.name} ({self.email})>"
