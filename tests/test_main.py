from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from remo_humidity import __main__ as entrypoint
from remo_humidity.config import load_config
from remo_humidity.credentials import AuthorizationError

ENV = {
    "YOUR_SPREADSHEET_ID": "sheet-id",
    "REMO_ACCESS_TOKEN": "token",
    "SPEAKER_SIGNAL_ID": "speaker-id",
    "HUMIDIFIER_SIGNAL_ID": "humidifier-id",
    "REMO_UPDATE_INTERVAL": "30",
}


@pytest.fixture
def environment(monkeypatch):
    for key, value in ENV.items():
        monkeypatch.setenv(key, value)
    for key in ("REMO_TOKEN_PATH", "REMO_CREDENTIALS_PATH", "REMO_LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    with patch.object(entrypoint, "load_dotenv"):
        yield


def test_main_exits_on_authorization_failure(environment):
    with patch.object(entrypoint, "authorize", side_effect=AuthorizationError("no browser")), patch.object(
        entrypoint, "async_main", new_callable=AsyncMock
    ) as async_main:
        assert entrypoint.main() == 1
    async_main.assert_not_called()


def test_main_runs_controller(environment):
    credentials = MagicMock()
    with patch.object(entrypoint, "authorize", return_value=credentials) as authorize, patch.object(
        entrypoint, "async_main", new_callable=AsyncMock
    ) as async_main:
        assert entrypoint.main() == 0
    authorize.assert_called_once_with("token.json", "credentials.json")
    config, passed_credentials = async_main.await_args.args
    assert config.update_interval == 30.0
    assert passed_credentials is credentials


@pytest.mark.asyncio
async def test_async_main_wires_coordinator():
    config = load_config(ENV, dotenv=False)
    with patch.object(entrypoint, "HumidityCoordinator") as coordinator_cls:
        coordinator_cls.return_value.async_run = AsyncMock()
        await entrypoint.async_main(config, MagicMock())

    args, kwargs = coordinator_cls.call_args
    sheets, remo, speaker, humidifier = args
    assert isinstance(sheets, entrypoint.SheetsClient)
    assert isinstance(remo, entrypoint.NatureRemoClient)
    assert speaker.signal_id == "speaker-id"
    assert humidifier.signal_id == "humidifier-id"
    assert kwargs == {"update_interval": 30.0}
    coordinator_cls.return_value.async_run.assert_awaited_once()
