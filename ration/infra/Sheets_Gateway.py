"""Thin wrapper over the Google Sheets v4 values API.

Exposes the two calls the repositories use: ranged reads and batched writes.
"""
import logging
from typing import Any, List, Optional

from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ration.logic.rations.errors import StoreError
from ration.utilities import config

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def get_sheets_service(client_email: Optional[str] = None, private_key: Optional[str] = None):
    """Authenticates with the service account from config and builds the Sheets API service."""
    client_email = client_email or config.GOOGLE_SERVICE_EMAIL
    private_key = private_key or config.GOOGLE_PRIVATE_KEY
    if not client_email or not private_key:
        raise StoreError("GOOGLE_SERVICE_EMAIL and GOOGLE_PRIVATE_KEY must be set")
    info = {
        "type": "service_account",
        "client_email": client_email,
        "private_key": private_key,
        "token_uri": config.GOOGLE_TOKEN_URI,
    }
    try:
        creds = Credentials.from_service_account_info(info, scopes=SCOPES)
        return build("sheets", "v4", credentials=creds, cache_discovery=False)
    except (GoogleAuthError, ValueError) as err:
        raise StoreError(f"Could not build Sheets service: {err}") from err


class SheetsGateway:
    def __init__(self, spreadsheet_id: str, service: Any = None):
        self.spreadsheet_id = spreadsheet_id
        self._service = service

    @property
    def service(self):
        if not self.spreadsheet_id:
            raise StoreError("RATION_SHEET_ID is not configured")
        if self._service is None:
            self._service = get_sheets_service()
        return self._service

    def get_values(self, range_name: str) -> List[list]:
        """Rows of the range; trailing empty rows and cells are omitted by the API."""
        try:
            result = self.service.spreadsheets().values().get(
                spreadsheetId=self.spreadsheet_id,
                range=range_name,
            ).execute()
        except (HttpError, GoogleAuthError) as err:
            raise StoreError(f"Failed to read {range_name}: {err}") from err
        return result.get("values", [])

    def batch_update(self, data: List[dict], value_input_option: str = "USER_ENTERED") -> int:
        """Writes each ``{"range", "values"}`` entry in one request. Returns the number of ranges sent."""
        if not data:
            return 0
        try:
            self.service.spreadsheets().values().batchUpdate(
                spreadsheetId=self.spreadsheet_id,
                body={"valueInputOption": value_input_option, "data": data},
            ).execute()
        except (HttpError, GoogleAuthError) as err:
            raise StoreError(f"Failed to write {len(data)} range(s): {err}") from err
        logger.debug("Wrote %s range(s) to %s", len(data), self.spreadsheet_id)
        return len(data)
