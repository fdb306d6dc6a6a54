"""Response stores: the Google Sheets store and the in-memory fallback."""
import logging
import threading
from abc import ABC, abstractmethod
from collections.abc import Callable

from invitation.core.config import Settings
from invitation.models import ResponseRecord, StoreResult
from invitation.sheets.client import get_sheets_service, missing_credentials

logger = logging.getLogger(__name__)

# First cell values that mark row 0 of the sheet as a header
HEADER_SENTINELS = frozenset({"Name", "Nama"})


class ResponseStore(ABC):
    """Append-only store of RSVP responses."""

    name: str

    @abstractmethod
    def append(self, record: ResponseRecord) -> StoreResult:
        """Persist one record."""

    @abstractmethod
    def read_all(self) -> StoreResult:
        """Return every stored record."""


class LocalResponseStore(ResponseStore):
    """Process-lifetime list of responses, used while the sheet is unavailable.

    Records are lost on restart.
    """

    name = "local"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: list[ResponseRecord] = []

    def append(self, record: ResponseRecord) -> StoreResult:
        with self._lock:
            self._records.append(record)
        return StoreResult.success([record])

    def read_all(self) -> StoreResult:
        with self._lock:
            return StoreResult.success(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


def _cell(row: list, index: int) -> str:
    if index < len(row) and row[index] is not None:
        return str(row[index])
    return ""


def rows_to_records(rows: list[list]) -> list[ResponseRecord]:
    """
    Map sheet rows to records.

    Row 0 is dropped when its first cell is a header sentinel. Short rows
    get empty strings for the missing columns.
    """
    start = 1 if rows and rows[0] and rows[0][0] in HEADER_SENTINELS else 0
    return [
        ResponseRecord(
            name=_cell(row, 0),
            attendance=_cell(row, 1),
            message=_cell(row, 2),
            timestamp=_cell(row, 3),
        )
        for row in rows[start:]
    ]


class SheetsResponseStore(ResponseStore):
    """Responses kept in a fixed four-column range of a Google Sheet.

    ``connect`` must succeed before ``append`` or ``read_all`` are used.
    Every failure, including exceptions from the API client, is returned
    as a failed StoreResult.
    """

    name = "sheets"

    def __init__(
        self,
        settings: Settings,
        service_factory: Callable[[Settings], object] = get_sheets_service,
    ) -> None:
        self.settings = settings
        self._service_factory = service_factory
        self._service = None

    @property
    def spreadsheet_id(self) -> str:
        return self.settings.google_sheet_id

    @property
    def data_range(self) -> str:
        return f"{self.settings.google_sheet_name}!A:D"

    @property
    def probe_range(self) -> str:
        return f"{self.settings.google_sheet_name}!A1:A1"

    def connect(self) -> StoreResult:
        """Build the API service and verify it with a single-cell read."""
        missing = missing_credentials(self.settings)
        if missing:
            logger.error(
                f"Missing required Google Sheets credentials: {', '.join(missing)}"
            )
            return StoreResult.failure("Missing required Google Sheets credentials")

        try:
            service = self._service_factory(self.settings)
            service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=self.probe_range,
            ).execute()
        except Exception as e:
            logger.error(f"Failed to connect to Google Sheets: {e}")
            self._service = None
            return StoreResult.failure(str(e))

        self._service = service
        logger.info(f"Google Sheets connected, spreadsheet {self.spreadsheet_id}")
        return StoreResult.success()

    def append(self, record: ResponseRecord) -> StoreResult:
        if self._service is None:
            return StoreResult.failure("Google Sheets is not connected")

        try:
            self._service.spreadsheets().values().append(
                spreadsheetId=self.spreadsheet_id,
                range=self.data_range,
                valueInputOption="RAW",
                body={"values": [record.as_row()]},
            ).execute()
        except Exception as e:
            logger.error(f"Error appending RSVP to Google Sheets: {e}")
            return StoreResult.failure(str(e))

        return StoreResult.success([record])

    def read_all(self) -> StoreResult:
        if self._service is None:
            return StoreResult.failure("Google Sheets is not connected")

        try:
            response = self._service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=self.data_range,
            ).execute()
        except Exception as e:
            logger.error(f"Error fetching responses from Google Sheets: {e}")
            return StoreResult.failure(str(e))

        return StoreResult.success(rows_to_records(response.get("values", [])))
