import pytest

from attendance_api import create_app
from attendance_api.integrations.sheets_client import SheetsClientHandle

HEADER = "'6A1'!H3:S3"
NAMES = "'6A1'!B5:B50"
SUMMARY = "'6A1'!A51:Y51"


class FakeSheets:
    """In-memory range client keyed by A1 address."""

    def __init__(self, ranges=None, error=None):
        self.ranges = dict(ranges or {})
        self.error = error
        self.reads = []
        self.writes = []

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    def read_range(self, cell_range):
        self._maybe_fail()
        a1 = cell_range.to_a1()
        self.reads.append(a1)
        return self.ranges.get(a1, [])

    def read_ranges(self, cell_ranges):
        return [self.read_range(r) for r in cell_ranges]

    def batch_write(self, updates):
        self._maybe_fail()
        self.writes.append([(r.to_a1(), value) for r, value in updates])
        return len(updates)

    @property
    def calls(self):
        return len(self.reads) + len(self.writes)


@pytest.fixture
def sheets():
    return FakeSheets(
        {
            HEADER: [["20/11", "21/11", " 22/11 "]],
            NAMES: [["An"], ["Bình"], [], ["Chi "]],
            "'6A1'!J5:J50": [["P"], ["A"]],
        }
    )


@pytest.fixture
def app(sheets):
    app = create_app({"TESTING": True, "LOG_FILE": "", "LOG_LEVEL": "DEBUG"})
    app.extensions["sheets_client"] = SheetsClientHandle(lambda: sheets)
    return app


@pytest.fixture
def client(app):
    return app.test_client()
