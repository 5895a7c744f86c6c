from recruiter.models.base import Base
from recruiter.models.candidate import Candidate
from recruiter.models.position import Position
from recruiter.models.user import User

__all__ = ["Base", "Candidate", "Position", "User"]
