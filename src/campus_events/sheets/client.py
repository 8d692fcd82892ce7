"""Google Sheets API client implementation.

This module reads event rows from a spreadsheet using a service account.

Notes:
    The Google API client is synchronous. This project wraps those calls using
    `asyncio.to_thread` so the rest of the codebase can remain async-friendly.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from campus_events.config import Settings
from campus_events.exceptions import ConfigurationError, SheetsAPIError

logger = structlog.get_logger()

SHEETS_SCOPE_READONLY = "https://www.googleapis.com/auth/spreadsheets.readonly"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


class SheetsClient:
    """Read-only Google Sheets client.

    Credentials are only checked when the sheet is first read, so a
    misconfigured deployment still starts and serves its (empty) cache.
    """

    def __init__(self, settings: Settings | None = None, service: Any | None = None) -> None:
        """Initialize Sheets client.

        Args:
            settings: Application settings. If None, uses default settings.
            service: Pre-built Sheets API service (tests). If None, one is
                built on first use.
        """
        from campus_events.config import get_settings

        self.settings = settings or get_settings()
        self._service = service
        logger.info("sheets_client_initialized", sheet_id=self.settings.sheet_id or None)

    async def get_rows(self, range_: str | None = None) -> list[list[Any]]:
        """Fetch the raw cell values of a range, row-major.

        Args:
            range_: A1 range. If None, uses the configured sheet range.

        Returns:
            List of rows; each row is a list of unformatted cell values.
            Trailing empty cells are omitted by the API.

        Raises:
            ConfigurationError: If the sheet id or credentials are missing.
            SheetsAPIError: If the API request fails.
        """
        spreadsheet_id = self.settings.sheet_id
        if not spreadsheet_id:
            raise ConfigurationError("SHEET_ID is not configured")

        resolved_range = range_ or self.settings.sheet_range
        logger.info("sheets_get_rows", sheet_id=spreadsheet_id, range=resolved_range)

        try:
            service = await self._ensure_service()
            return await asyncio.to_thread(self._get_rows_sync, service, spreadsheet_id, resolved_range)
        except (ConfigurationError, SheetsAPIError):
            raise
        except Exception as exc:  # noqa: BLE001
            logger.exception("sheets_get_rows_failed", range=resolved_range, error=str(exc))
            raise SheetsAPIError(str(exc)) from exc

    async def _ensure_service(self) -> Any:
        if self._service is None:
            self._service = await asyncio.to_thread(self._build_service)
            logger.info("sheets_authentication_completed")
        return self._service

    def _build_credentials(self) -> Any:
        # Imported lazily to keep import-time cost low and tests fast.
        from google.oauth2 import service_account

        scopes = [SHEETS_SCOPE_READONLY]
        key_file = self.settings.google_service_account_file
        if key_file is not None:
            if not key_file.exists():
                raise ConfigurationError(f"Service account file not found: {key_file}")
            return service_account.Credentials.from_service_account_file(str(key_file), scopes=scopes)

        if not self.settings.google_client_email or not self.settings.google_private_key:
            raise ConfigurationError(
                "GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY must be set to read the sheet"
            )

        info = {
            "type": "service_account",
            "client_email": self.settings.google_client_email,
            "private_key": self.settings.decoded_private_key,
            "token_uri": GOOGLE_TOKEN_URI,
        }
        return service_account.Credentials.from_service_account_info(info, scopes=scopes)

    def _build_service(self) -> Any:
        from googleapiclient.discovery import build

        creds = self._build_credentials()
        # cache_discovery=False prevents writing discovery docs to disk.
        return build("sheets", "v4", credentials=creds, cache_discovery=False)

    def _get_rows_sync(self, service: Any, spreadsheet_id: str, range_: str) -> list[list[Any]]:
        request = (
            service.spreadsheets()
            .values()
            .get(
                spreadsheetId=spreadsheet_id,
                range=range_,
                majorDimension="ROWS",
                valueRenderOption="UNFORMATTED_VALUE",
            )
        )
        response = request.execute()
        return response.get("values", []) or []
