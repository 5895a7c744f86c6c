from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from recruiter.models.base import Base, SerialPrimaryKeyMixin, TimestampMixin


class Position(SerialPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "positions"

    title: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    department: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(nullable=True)
    location: Mapped[str] = mapped_column(String(200), nullable=False)
    status: Mapped[str] = mapped_column(
        String(30), nullable=False, default="Active", server_default="Active"
    )

    def __repr__(self) -> str:
        return f"<Position {self.title} ({self.department})>"
