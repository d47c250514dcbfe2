import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from .const import (
    DEFAULT_CREDENTIALS_PATH,
    DEFAULT_SCAN_INTERVAL,
    DEFAULT_SHEET_NAME,
    DEFAULT_TOKEN_PATH,
    ENV_ACCESS_TOKEN,
    ENV_CREDENTIALS_PATH,
    ENV_HUMIDIFIER_SIGNAL_ID,
    ENV_LOG_LEVEL,
    ENV_SHEET_NAME,
    ENV_SPEAKER_SIGNAL_ID,
    ENV_SPREADSHEET_ID,
    ENV_TOKEN_PATH,
    ENV_UPDATE_INTERVAL,
    PLACEHOLDER_ACCESS_TOKEN,
    PLACEHOLDER_SIGNAL_ID,
    PLACEHOLDER_SPREADSHEET_ID,
)
from .models import SignalTarget

_LOGGER = logging.getLogger(__name__)


class ConfigMissingError(Exception):
    pass


def is_unset(value: str | None, placeholder: str) -> bool:
    """True when a value is empty or still the example placeholder."""
    return not value or value == placeholder


@dataclass(frozen=True)
class ControllerConfig:
    spreadsheet_id: str | None
    access_token: str | None
    speaker_signal_id: str | None
    humidifier_signal_id: str | None
    token_path: str = DEFAULT_TOKEN_PATH
    credentials_path: str = DEFAULT_CREDENTIALS_PATH
    sheet_name: str = DEFAULT_SHEET_NAME
    update_interval: float = DEFAULT_SCAN_INTERVAL
    log_level: str = "INFO"

    @property
    def speaker(self) -> SignalTarget:
        return SignalTarget("speaker", self.speaker_signal_id)

    @property
    def humidifier(self) -> SignalTarget:
        return SignalTarget("humidifier", self.humidifier_signal_id)

    def missing(self) -> list[str]:
        """Names of required environment variables that are unset or placeholders."""
        checks = [
            (ENV_SPREADSHEET_ID, self.spreadsheet_id, PLACEHOLDER_SPREADSHEET_ID),
            (ENV_ACCESS_TOKEN, self.access_token, PLACEHOLDER_ACCESS_TOKEN),
            (ENV_SPEAKER_SIGNAL_ID, self.speaker_signal_id, PLACEHOLDER_SIGNAL_ID),
            (ENV_HUMIDIFIER_SIGNAL_ID, self.humidifier_signal_id, PLACEHOLDER_SIGNAL_ID),
        ]
        return [name for name, value, placeholder in checks if is_unset(value, placeholder)]


def _interval(raw: str | None) -> float:
    if not raw:
        return DEFAULT_SCAN_INTERVAL
    try:
        value = float(raw)
    except ValueError:
        _LOGGER.warning("Ignoring non-numeric %s=%r", ENV_UPDATE_INTERVAL, raw)
        return DEFAULT_SCAN_INTERVAL
    if value <= 0:
        _LOGGER.warning("Ignoring non-positive %s=%r", ENV_UPDATE_INTERVAL, raw)
        return DEFAULT_SCAN_INTERVAL
    return value


def load_config(env: dict | None = None, dotenv: bool = True) -> ControllerConfig:
    """Build the controller config from the environment.

    A ``.env`` file in the working directory is loaded first unless
    ``dotenv`` is False. Pass ``env`` to read from a mapping instead of
    ``os.environ``.
    """
    if dotenv:
        load_dotenv()
    if env is None:
        env = os.environ

    config = ControllerConfig(
        spreadsheet_id=env.get(ENV_SPREADSHEET_ID),
        access_token=env.get(ENV_ACCESS_TOKEN),
        speaker_signal_id=env.get(ENV_SPEAKER_SIGNAL_ID),
        humidifier_signal_id=env.get(ENV_HUMIDIFIER_SIGNAL_ID),
        token_path=env.get(ENV_TOKEN_PATH) or DEFAULT_TOKEN_PATH,
        credentials_path=env.get(ENV_CREDENTIALS_PATH) or DEFAULT_CREDENTIALS_PATH,
        sheet_name=env.get(ENV_SHEET_NAME) or DEFAULT_SHEET_NAME,
        update_interval=_interval(env.get(ENV_UPDATE_INTERVAL)),
        log_level=(env.get(ENV_LOG_LEVEL) or "INFO").upper(),
    )

    for name in config.missing():
        _LOGGER.warning("Configuration value %s is not set", name)
    return config
