"""RSVP persistence with fallback from Google Sheets to local memory."""
import logging
from collections.abc import Callable
from datetime import datetime

from invitation.core.state import ConnectionState
from invitation.models import ResponseRecord, RSVPSubmission
from invitation.sheets.store import LocalResponseStore, ResponseStore, SheetsResponseStore

logger = logging.getLogger(__name__)


class RSVPPersistence:
    """Route RSVP writes and reads to the remote store or the local fallback.

    The store is chosen from the connection state at call time. A failed
    remote operation marks the remote store unreachable, so later calls
    go straight to the local store until the reconnect supervisor has
    verified the connection again.
    """

    def __init__(
        self,
        remote: SheetsResponseStore,
        local: LocalResponseStore,
        state: ConnectionState,
        timestamp_format: str,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.remote = remote
        self.local = local
        self.state = state
        self.timestamp_format = timestamp_format
        self._clock = clock

    def active_store(self) -> ResponseStore:
        return self.remote if self.state.reachable else self.local

    def connect(self) -> bool:
        """
        Verify the remote store and update the connection state.

        Returns True when the remote store is reachable afterwards. If
        another attempt is already running, returns the current state
        without starting a second one.
        """
        if not self.state.try_begin_connect():
            logger.debug("Connection attempt already in progress")
            return self.state.reachable

        try:
            result = self.remote.connect()
            if result.ok:
                self.state.mark_reachable()
            else:
                self.state.mark_unreachable(result.error or "connect failed")
            return result.ok
        finally:
            self.state.end_connect()

    def submit(self, submission: RSVPSubmission) -> ResponseRecord:
        """
        Store one submission in exactly one store.

        Raises RSVPValidationError before any write if name or attendance
        is missing. Remote failures fall back to the local store and still
        count as a successful submission.
        """
        record = submission.to_record(self._clock(), self.timestamp_format)

        store = self.active_store()
        if store is self.remote:
            result = self.remote.append(record)
            if result.ok:
                logger.info(f"RSVP saved to Google Sheets: {record.name}")
                return record
            self.state.mark_unreachable(result.error or "append failed")
            logger.warning("Falling back to local storage for RSVP")

        self.local.append(record)
        logger.info(f"RSVP saved locally: {record.name}")
        return record

    def list_responses(self) -> list[ResponseRecord]:
        """
        Return every response from the active store.

        When the remote read fails the local records are returned instead;
        rows already written to the sheet are then missing from the result.
        """
        if self.active_store() is self.remote:
            result = self.remote.read_all()
            if result.ok:
                return result.records
            self.state.mark_unreachable(result.error or "read failed")
            logger.warning("Falling back to local storage for responses")

        return self.local.read_all().records
