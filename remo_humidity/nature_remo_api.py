import asyncio
import logging

import aiohttp

from .const import (
    PLACEHOLDER_ACCESS_TOKEN,
    PLACEHOLDER_SIGNAL_ID,
    REMO_BASE_URL,
    REMO_DEVICES_ENDPOINT,
)
from .models import SignalTarget

_LOGGER = logging.getLogger(__name__)


class NatureRemoApiError(Exception):
    pass


class NatureRemoAuthError(NatureRemoApiError):
    pass


class NatureRemoClient:
    def __init__(self, access_token: str | None, session: aiohttp.ClientSession, base_url: str = REMO_BASE_URL):
        self._access_token = access_token
        self._session = session
        self._base_url = base_url.rstrip("/")

    # --- auth helpers ---

    @property
    def has_token(self) -> bool:
        return bool(self._access_token) and self._access_token != PLACEHOLDER_ACCESS_TOKEN

    def _auth_headers(self) -> dict:
        if not self.has_token:
            raise NatureRemoAuthError("Access token not available")
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

    @staticmethod
    async def _raise_for_status(resp: aiohttp.ClientResponse, what: str) -> None:
        if resp.status == 200:
            return
        body = await resp.text(errors="replace")
        _LOGGER.error("%s failed: HTTP %s, body=%s", what, resp.status, body)
        if resp.status == 401:
            _LOGGER.error("Nature Remo access token is invalid or expired")
            raise NatureRemoAuthError(f"{what} HTTP 401: {body}")
        raise NatureRemoApiError(f"{what} HTTP {resp.status}: {body}")

    # --- API calls ---

    async def get_devices(self, endpoint: str = REMO_DEVICES_ENDPOINT):
        url = f"{self._base_url}/{endpoint}"
        _LOGGER.debug("API call: get_devices URL=%s", url)
        async with self._session.get(url, headers=self._auth_headers()) as resp:
            await self._raise_for_status(resp, endpoint)
            data = await resp.json()
        _LOGGER.debug("API response: get_devices data=%s", data)
        return data

    async def get_humidity(self) -> float | None:
        """Current humidity (%) of the first device, or None if unavailable."""
        if not self.has_token:
            _LOGGER.error("Nature Remo access token is not set")
            return None

        devices = await self.get_devices()
        return extract_humidity(devices)

    async def send_signal(self, target: SignalTarget) -> bool:
        """Press a virtual remote button. Returns False if the send failed."""
        if not self.has_token:
            _LOGGER.error("Nature Remo access token is not set; not sending %s", target.name)
            return False
        if not target.signal_id or target.signal_id == PLACEHOLDER_SIGNAL_ID:
            _LOGGER.error("Signal id for %s is not set", target.name)
            return False

        url = f"{self._base_url}/signals/{target.signal_id}/send"
        _LOGGER.debug("API call: send_signal URL=%s", url)
        try:
            async with self._session.post(url, json={}, headers=self._auth_headers()) as resp:
                await self._raise_for_status(resp, f"send_signal {target.name}")
        except (NatureRemoApiError, aiohttp.ClientError, asyncio.TimeoutError) as err:
            _LOGGER.error("Failed to send %s signal %s: %s", target.name, target.signal_id, err)
            return False
        except Exception as err:  # noqa: BLE001
            _LOGGER.error("Unexpected error sending %s signal %s: %r", target.name, target.signal_id, err)
            return False

        _LOGGER.info("Sent %s signal %s", target.name, target.signal_id)
        return True


def extract_humidity(devices) -> float | None:
    """Pull ``[0].newest_events.hu.val`` out of a devices response."""
    if not isinstance(devices, list) or not devices or not isinstance(devices[0], dict):
        return None
    events = devices[0].get("newest_events") or {}
    hu = events.get("hu")
    if not hu or hu.get("val") is None:
        return None
    try:
        return float(hu["val"])
    except (TypeError, ValueError):
        _LOGGER.warning("Unexpected humidity value: %r", hu["val"])
        return None
