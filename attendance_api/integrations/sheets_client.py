"""Thin range client over the Google Sheets values API.

The client only knows how to read rectangular ranges and how to send a
batch of single-cell writes.  Everything attendance-specific lives in
:mod:`attendance_api.integrations.google_sheets_attendance`.
"""

from __future__ import annotations

import json
import logging
import threading
from typing import Any, Callable, List, Optional, Sequence, Tuple

import gspread
import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from gspread.exceptions import GSpreadException

from ..errors import CredentialsError, RemoteError
from ..utils.cell_range import CellRange

log = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
VALUE_INPUT_OPTION = "USER_ENTERED"

# Exceptions surfaced by gspread, the auth layer and the HTTP transport.
REMOTE_ERRORS = (GSpreadException, GoogleAuthError, requests.RequestException)

Rows = List[List[Any]]


# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


def load_credentials(creds_json: str) -> Credentials:
    if not creds_json:
        log.error("Service account credentials are not configured.")
        raise CredentialsError(
            "Service account credentials not found. Set GOOGLE_SERVICE_ACCOUNT_JSON "
            "to the full JSON payload of your service account key."
        )

    try:
        info = json.loads(creds_json)
    except json.JSONDecodeError as exc:
        log.exception("Failed to parse service account JSON")
        raise CredentialsError("Invalid service account JSON payload.") from exc

    try:
        return Credentials.from_service_account_info(info, scopes=SCOPES)
    except (ValueError, KeyError, TypeError, GoogleAuthError) as exc:
        log.exception("Failed to build Google credentials from service account info.")
        raise CredentialsError(f"Invalid service account credentials: {exc}") from exc


def authorize(creds_json: str) -> gspread.Client:
    log.debug("Initialising Google Sheets client")
    creds = load_credentials(creds_json)
    try:
        client = gspread.authorize(creds)
    except REMOTE_ERRORS as exc:
        log.exception("Failed to authorise Google Sheets client.")
        raise RemoteError(str(exc)) from exc
    log.debug("Google Sheets client initialised successfully.")
    return client


# ---------------------------------------------------------------------------
# Range client
# ---------------------------------------------------------------------------


class SheetsClient:
    """Reads and writes cell ranges of a single spreadsheet document."""

    def __init__(self, spreadsheet: gspread.Spreadsheet):
        self._spreadsheet = spreadsheet

    @classmethod
    def from_credentials(cls, creds_json: str, spreadsheet_id: str) -> "SheetsClient":
        gc = authorize(creds_json)
        log.debug("Opening spreadsheet %s", spreadsheet_id)
        try:
            spreadsheet = gc.open_by_key(spreadsheet_id)
        except REMOTE_ERRORS as exc:
            log.exception("Failed to open spreadsheet", extra={"spreadsheet_id": spreadsheet_id})
            raise RemoteError(str(exc)) from exc
        return cls(spreadsheet)

    def read_range(self, cell_range: CellRange) -> Rows:
        a1 = cell_range.to_a1()
        log.debug("Reading range %s", a1)
        try:
            response = self._spreadsheet.values_get(a1)
        except REMOTE_ERRORS as exc:
            log.exception("Failed to read range", extra={"range": a1})
            raise RemoteError(str(exc)) from exc
        return response.get("values", [])

    def read_ranges(self, cell_ranges: Sequence[CellRange]) -> List[Rows]:
        ranges = [r.to_a1() for r in cell_ranges]
        log.debug("Reading %d ranges: %s", len(ranges), ranges)
        try:
            response = self._spreadsheet.values_batch_get(ranges)
        except REMOTE_ERRORS as exc:
            log.exception("Failed to read ranges", extra={"ranges": ranges})
            raise RemoteError(str(exc)) from exc

        value_ranges = response.get("valueRanges", [])
        out = [vr.get("values", []) for vr in value_ranges]
        # one entry per requested range
        out.extend([] for _ in range(len(ranges) - len(out)))
        return out

    def batch_write(self, updates: Sequence[Tuple[CellRange, Any]]) -> int:
        if not updates:
            log.info("Batch write skipped: no cells to update")
            return 0

        data = [{"range": r.to_a1(), "values": [[value]]} for r, value in updates]
        body = {"valueInputOption": VALUE_INPUT_OPTION, "data": data}
        try:
            self._spreadsheet.values_batch_update(body)
        except REMOTE_ERRORS as exc:
            log.exception("Batch write failed", extra={"cells": len(data)})
            raise RemoteError(str(exc)) from exc

        log.debug("Batch write applied to %d cells", len(data))
        return len(data)


class SheetsClientHandle:
    """Lazily builds one shared :class:`SheetsClient` for all requests.

    Creation happens at most once at a time; a failed build leaves the
    handle empty so the next request retries authentication.
    """

    def __init__(self, factory: Callable[[], SheetsClient]):
        self._factory = factory
        self._client: Optional[SheetsClient] = None
        self._lock = threading.Lock()

    @property
    def is_initialised(self) -> bool:
        return self._client is not None

    def get(self) -> SheetsClient:
        client = self._client
        if client is not None:
            return client
        with self._lock:
            if self._client is None:
                log.info("Creating shared Google Sheets client")
                self._client = self._factory()
            return self._client

    def reset(self) -> None:
        with self._lock:
            self._client = None
