from recruiter.core.config import Settings
from recruiter.core.database import create_engine
from recruiter.storage.base import RecordStore
from recruiter.storage.database import DatabaseRecordStore
from recruiter.storage.memory import InMemoryRecordStore

__all__ = ["DatabaseRecordStore", "InMemoryRecordStore", "RecordStore", "build_store"]


def build_store(settings: Settings) -> RecordStore:
    """Construct the backend named by ``settings.storage_backend``."""
    if settings.storage_backend == "database":
        engine = create_engine(settings.database_url, echo=settings.debug)
        return DatabaseRecordStore(engine, create_tables=settings.database_create_tables)
    return InMemoryRecordStore(seed_sample_data=settings.seed_sample_data)
