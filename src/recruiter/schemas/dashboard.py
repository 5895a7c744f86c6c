from recruiter.schemas import CamelModel


class DashboardStats(CamelModel):
    total_positions: int
    total_candidates: int
    in_review: int
    shortlisted: int
