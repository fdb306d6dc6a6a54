"""Application-owned singletons handed to routes through FastAPI dependencies."""
from functools import lru_cache

from invitation.core.config import settings
from invitation.core.state import ConnectionState
from invitation.sheets.persistence import RSVPPersistence
from invitation.sheets.store import LocalResponseStore, SheetsResponseStore


@lru_cache
def get_persistence() -> RSVPPersistence:
    """Dependency for getting the RSVP persistence and its connection state."""
    return RSVPPersistence(
        remote=SheetsResponseStore(settings),
        local=LocalResponseStore(),
        state=ConnectionState(),
        timestamp_format=settings.timestamp_format,
    )
