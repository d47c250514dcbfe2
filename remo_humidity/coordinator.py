import asyncio
import logging

import aiohttp

from .config import ConfigMissingError
from .const import DEFAULT_SCAN_INTERVAL
from .models import Mode, PowerState, SignalTarget, ThresholdConfig
from .nature_remo_api import NatureRemoApiError, NatureRemoClient
from .sheets import SheetsClient, SheetsError

_LOGGER = logging.getLogger(__name__)


class UpdateFailed(Exception):
    pass


class HumidityCoordinator:
    """Coordinator for humidity polling.

    Each cycle reads the thresholds from the spreadsheet and the current
    humidity from Nature Remo, then switches the speaker and humidifier
    together. ``power_state`` is the last state the pair was commanded to;
    it starts OFF and is never persisted.
    """

    def __init__(
        self,
        sheets: SheetsClient,
        remo: NatureRemoClient,
        speaker: SignalTarget,
        humidifier: SignalTarget,
        update_interval: float = DEFAULT_SCAN_INTERVAL,
    ):
        self._sheets = sheets
        self._remo = remo
        self._targets = (speaker, humidifier)
        self.update_interval = update_interval

        self.power_state = PowerState.OFF
        self.last_update_success: bool | None = None

        self._lock = asyncio.Lock()
        self._stop = asyncio.Event()
        self._tasks: set[asyncio.Task] = set()

    # --- scheduling ---

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        """Cancel future cycles. A cycle already running is left to finish."""
        if not self._stop.is_set():
            _LOGGER.info("Humidity polling stopped")
            self._stop.set()

    async def async_run(self) -> None:
        """Run a cycle now and then every ``update_interval`` until stopped."""
        _LOGGER.info("Humidity polling started; interval %s seconds", self.update_interval)
        while not self._stop.is_set():
            self._schedule_refresh()
            try:
                await asyncio.wait_for(self._stop.wait(), timeout=self.update_interval)
            except asyncio.TimeoutError:
                pass
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def _schedule_refresh(self) -> None:
        task = asyncio.create_task(self.async_refresh())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def async_refresh(self) -> bool:
        """Run one cycle. Returns False if it failed or was skipped."""
        if self._lock.locked():
            _LOGGER.warning("Previous humidity cycle still running; skipping this one")
            return False
        async with self._lock:
            try:
                await self._async_update_data()
            except UpdateFailed as err:
                self.last_update_success = False
                _LOGGER.error("Humidity cycle failed: %s", err)
                return False
            except Exception:  # noqa: BLE001
                self.last_update_success = False
                _LOGGER.exception("Humidity cycle failed with an unexpected error")
                return False
        self.last_update_success = True
        return True

    # --- one cycle ---

    async def _async_fetch(self) -> tuple[ThresholdConfig, float]:
        try:
            thresholds = await self._sheets.read_thresholds()
        except (SheetsError, ConfigMissingError) as err:
            raise UpdateFailed(f"Spreadsheet error: {err}") from err
        except aiohttp.ClientError as err:
            raise UpdateFailed(f"Spreadsheet request failed: {err}") from err
        except Exception as err:  # noqa: BLE001
            raise UpdateFailed(f"Unexpected spreadsheet error: {err}") from err

        try:
            humidity = await self._remo.get_humidity()
        except NatureRemoApiError as err:
            raise UpdateFailed(f"Nature Remo API error: {err}") from err
        except aiohttp.ClientError as err:
            raise UpdateFailed(f"Nature Remo request failed: {err}") from err
        except Exception as err:  # noqa: BLE001
            raise UpdateFailed(f"Unexpected Nature Remo error: {err}") from err

        if humidity is None:
            raise UpdateFailed("Humidity reading not found in Nature Remo device data")
        return thresholds, humidity

    async def _async_update_data(self) -> None:
        thresholds, humidity = await self._async_fetch()

        _LOGGER.info("Current humidity: %s%%", humidity)
        _LOGGER.info("LOW: %s%%, HIGH: %s%%, MODE: %s", thresholds.low, thresholds.high, thresholds.mode.value)
        _LOGGER.info("Power state (internal): %s", self.power_state.name)

        if thresholds.mode is Mode.OFF:
            _LOGGER.info("Automatic mode is OFF")
            self.stop()
            if self.power_state is PowerState.ON:
                _LOGGER.info("MODE is OFF; switching the appliances off")
                await self._async_switch(PowerState.OFF)
            return

        if humidity <= thresholds.low and self.power_state is PowerState.OFF:
            _LOGGER.info("Humidity at or below LOW; switching on")
            await self._async_switch(PowerState.ON)
        elif humidity >= thresholds.high and self.power_state is PowerState.ON:
            _LOGGER.info("Humidity at or above HIGH; switching off")
            await self._async_switch(PowerState.OFF)

    async def _async_switch(self, new_state: PowerState) -> None:
        # The signals toggle the appliances, so both are sent for ON and OFF.
        results = []
        for target in self._targets:
            results.append(await self._remo.send_signal(target))

        if not all(results):
            # State still follows the command; the appliances may now be out of sync.
            _LOGGER.warning(
                "Not every signal was sent; recording power state %s anyway", new_state.name
            )
        self.power_state = new_state
