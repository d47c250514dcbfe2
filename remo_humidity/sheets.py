import asyncio
import logging
from urllib.parse import quote

import aiohttp
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials

from .config import ConfigMissingError, is_unset
from .const import (
    CELL_HIGH,
    CELL_LOW,
    CELL_MODE,
    DEFAULT_SHEET_NAME,
    MODE_OFF,
    PLACEHOLDER_SPREADSHEET_ID,
    SHEET_COLUMNS,
    SHEETS_BASE_URL,
)
from .models import Mode, ThresholdConfig

_LOGGER = logging.getLogger(__name__)


class SheetsError(Exception):
    pass


class SheetsApiError(SheetsError):
    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class SheetsNoDataError(SheetsError):
    pass


class ThresholdError(SheetsError):
    pass


class SheetsClient:
    def __init__(
        self,
        credentials: Credentials,
        spreadsheet_id: str,
        session: aiohttp.ClientSession,
        sheet_name: str = DEFAULT_SHEET_NAME,
        base_url: str = SHEETS_BASE_URL,
    ):
        self._credentials = credentials
        self._spreadsheet_id = spreadsheet_id
        self._session = session
        self._sheet_name = sheet_name
        self._base_url = base_url.rstrip("/")

    @property
    def range(self) -> str:
        return f"{self._sheet_name}!{SHEET_COLUMNS}"

    # --- token helpers ---

    async def ensure_token(self) -> str:
        """Return a valid access token, refreshing it if needed."""
        if self._credentials.valid and self._credentials.token:
            return self._credentials.token
        _LOGGER.debug("Refreshing Google access token")
        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._credentials.refresh, Request())
        except Exception as err:  # noqa: BLE001
            raise SheetsApiError(f"Token refresh failed: {err}") from err
        _LOGGER.info("Google access token refreshed; expires at %s", self._credentials.expiry)
        return self._credentials.token

    # --- API calls ---

    async def get_values(self, cell_range: str) -> list[list[str]]:
        token = await self.ensure_token()
        url = f"{self._base_url}/{self._spreadsheet_id}/values/{quote(cell_range, safe='!:')}"
        _LOGGER.debug("API call: get_values URL=%s", url)
        async with self._session.get(url, headers={"Authorization": f"Bearer {token}"}) as resp:
            if resp.status != 200:
                body = await resp.text()
                _LOGGER.error("Spreadsheet read failed: HTTP %s, body=%s", resp.status, body)
                if resp.status == 403:
                    _LOGGER.error("Permission denied: check the OAuth scope and the sheet's sharing settings")
                elif resp.status == 404:
                    _LOGGER.error("Spreadsheet or sheet not found: check the spreadsheet id and sheet name")
                raise SheetsApiError(f"values.get HTTP {resp.status}: {body}", status=resp.status)
            data = await resp.json()
        _LOGGER.debug("API response: get_values data=%s", data)
        return data.get("values") or []

    async def read_thresholds(self) -> ThresholdConfig:
        if is_unset(self._spreadsheet_id, PLACEHOLDER_SPREADSHEET_ID):
            raise ConfigMissingError("Spreadsheet id is not set")
        rows = await self.get_values(self.range)
        if not rows:
            raise SheetsNoDataError(f"No data found in {self.range}")
        return parse_thresholds(rows)


def _cell(rows: list[list[str]], position: tuple[int, int], name: str) -> str:
    row, col = position
    try:
        return rows[row][col]
    except IndexError:
        raise ThresholdError(f"{name} cell (row {row}, column {col}) is empty") from None


def _number(raw, name: str) -> float:
    try:
        return float(str(raw).strip().rstrip("%"))
    except ValueError:
        raise ThresholdError(f"{name} value {raw!r} is not a number") from None


def parse_thresholds(rows: list[list[str]]) -> ThresholdConfig:
    """Extract LOW, HIGH and MODE from raw sheet rows.

    LOW is row 1 column D, HIGH is row 2 column D and MODE is row 1
    column E (0-indexed). MODE "OFF" disables automation; anything else,
    including an empty cell, is treated as AUTO.
    """
    low = _number(_cell(rows, CELL_LOW, "LOW"), "LOW")
    high = _number(_cell(rows, CELL_HIGH, "HIGH"), "HIGH")
    mode_row, mode_col = CELL_MODE
    try:
        raw_mode = rows[mode_row][mode_col]
    except IndexError:
        raw_mode = ""
    mode = Mode.OFF if str(raw_mode).strip() == MODE_OFF else Mode.AUTO

    if low > high:
        _LOGGER.warning("LOW threshold %s is above HIGH threshold %s", low, high)
    return ThresholdConfig(low=low, high=high, mode=mode)
