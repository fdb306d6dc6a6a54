"""Tests for the response stores."""

from invitation.core.config import Settings
from invitation.models import ResponseRecord
from invitation.sheets.store import LocalResponseStore, SheetsResponseStore, rows_to_records


def make_record(name: str, attendance: str = "attending") -> ResponseRecord:
    return ResponseRecord(name=name, attendance=attendance, timestamp="17/10/2026, 14.05.09")


class TestLocalResponseStore:
    """Tests for the in-memory fallback store."""

    def test_empty(self, local: LocalResponseStore):
        result = local.read_all()
        assert result.ok is True
        assert result.records == []

    def test_insertion_order(self, local: LocalResponseStore):
        """Test records come back oldest first."""
        for name in ["Alya", "Budi", "Citra"]:
            assert local.append(make_record(name)).ok is True

        names = [r.name for r in local.read_all().records]
        assert names == ["Alya", "Budi", "Citra"]
        assert len(local) == 3

    def test_read_returns_copy(self, local: LocalResponseStore):
        """Test callers cannot modify the stored list."""
        local.append(make_record("Alya"))
        local.read_all().records.clear()
        assert len(local) == 1


class TestRowsToRecords:
    """Tests for mapping sheet rows to records."""

    def test_header_row_stripped(self):
        rows = [
            ["Name", "Attendance", "Message", "Timestamp"],
            ["Alya", "attending", "", "t1"],
        ]
        records = rows_to_records(rows)
        assert [r.name for r in records] == ["Alya"]

    def test_indonesian_header_row_stripped(self):
        rows = [["Nama", "Kehadiran", "Ucapan", "Waktu"], ["Budi", "attending", "Hi", "t"]]
        assert [r.name for r in rows_to_records(rows)] == ["Budi"]

    def test_first_row_kept_without_header(self):
        rows = [["Alya", "attending", "", "t1"], ["Budi", "not attending", "", "t2"]]
        assert [r.name for r in rows_to_records(rows)] == ["Alya", "Budi"]

    def test_short_rows_padded(self):
        """Test missing trailing cells become empty strings."""
        records = rows_to_records([["Alya", "attending"], []])
        assert records[0] == ResponseRecord(name="Alya", attendance="attending")
        assert records[1] == ResponseRecord()

    def test_empty_sheet(self):
        assert rows_to_records([]) == []


class TestSheetsResponseStore:
    """Tests for the Google Sheets store against a fake service."""

    def test_connect_verifies_probe_cell(self, remote: SheetsResponseStore, sheet):
        result = remote.connect()
        assert result.ok is True
        assert sheet.calls == [("get", "sheet-123", "myuser2!A1:A1")]

    def test_connect_missing_credentials(self, settings: Settings, sheet):
        """Test connect fails without building the service."""
        built = []
        incomplete = settings.model_copy(update={"google_private_key": ""})
        store = SheetsResponseStore(
            incomplete, service_factory=lambda s: built.append(s) or sheet
        )

        result = store.connect()
        assert result.ok is False
        assert "credentials" in result.error
        assert built == []

    def test_connect_probe_failure(self, remote: SheetsResponseStore, sheet):
        sheet.fail_on.add("get")
        result = remote.connect()
        assert result.ok is False
        assert remote.read_all().ok is False

    def test_connect_factory_error(self, settings: Settings):
        """Test errors building credentials are reported, not raised."""

        def broken_factory(_):
            raise ValueError("Could not deserialize key data")

        result = SheetsResponseStore(settings, service_factory=broken_factory).connect()
        assert result.ok is False
        assert "deserialize" in result.error

    def test_operations_require_connect(self, remote: SheetsResponseStore, sheet):
        assert remote.append(make_record("Alya")).ok is False
        assert remote.read_all().ok is False
        assert sheet.calls == []

    def test_append_writes_raw_row(self, remote: SheetsResponseStore, sheet):
        remote.connect()
        record = ResponseRecord(
            name="Alya", attendance="attending", message="Barakallah", timestamp="t"
        )

        assert remote.append(record).ok is True
        assert sheet.calls[-1] == (
            "append",
            "sheet-123",
            "myuser2!A:D",
            "RAW",
            {"values": [["Alya", "attending", "Barakallah", "t"]]},
        )

    def test_append_failure(self, remote: SheetsResponseStore, sheet):
        remote.connect()
        sheet.fail_on.add("append")

        result = remote.append(make_record("Alya"))
        assert result.ok is False
        assert sheet.rows == []

    def test_read_all(self, remote: SheetsResponseStore, sheet):
        sheet.rows = [
            ["Nama", "Kehadiran", "Ucapan", "Waktu"],
            ["Alya", "attending", "", "t1"],
            ["Budi", "not attending", "Maaf"],
        ]
        remote.connect()

        result = remote.read_all()
        assert result.ok is True
        assert result.records == [
            ResponseRecord(name="Alya", attendance="attending", timestamp="t1"),
            ResponseRecord(name="Budi", attendance="not attending", message="Maaf"),
        ]
