import asyncio
import logging
import os
import signal
import sys

import aiohttp
from dotenv import load_dotenv

from .config import ControllerConfig, load_config
from .const import ENV_LOG_LEVEL
from .coordinator import HumidityCoordinator
from .credentials import AuthorizationError, authorize
from .nature_remo_api import NatureRemoClient
from .sheets import SheetsClient

_LOGGER = logging.getLogger(__name__)


async def async_main(config: ControllerConfig, credentials) -> None:
    async with aiohttp.ClientSession() as session:
        sheets = SheetsClient(credentials, config.spreadsheet_id, session, sheet_name=config.sheet_name)
        remo = NatureRemoClient(config.access_token, session)
        coordinator = HumidityCoordinator(
            sheets,
            remo,
            config.speaker,
            config.humidifier,
            update_interval=config.update_interval,
        )

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, coordinator.stop)
            except NotImplementedError:
                # add_signal_handler is unavailable on Windows event loops
                pass

        await coordinator.async_run()


def main() -> int:
    load_dotenv()
    level = (os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = load_config(dotenv=False)

    try:
        credentials = authorize(config.token_path, config.credentials_path)
    except AuthorizationError as err:
        _LOGGER.error("%s", err)
        return 1

    asyncio.run(async_main(config, credentials))
    return 0


if __name__ == "__main__":
    sys.exit(main())
