from remo_humidity.config import load_config
from remo_humidity.const import DEFAULT_SCAN_INTERVAL

ENV = {
    "YOUR_SPREADSHEET_ID": "sheet-id",
    "REMO_ACCESS_TOKEN": "token",
    "SPEAKER_SIGNAL_ID": "speaker-id",
    "HUMIDIFIER_SIGNAL_ID": "humidifier-id",
}


def test_load_config_defaults():
    config = load_config(ENV, dotenv=False)
    assert config.missing() == []
    assert config.sheet_name == "sensor"
    assert config.token_path == "token.json"
    assert config.credentials_path == "credentials.json"
    assert config.update_interval == DEFAULT_SCAN_INTERVAL
    assert config.speaker.signal_id == "speaker-id"
    assert config.humidifier.name == "humidifier"


def test_missing_and_placeholder_values():
    env = dict(ENV, REMO_ACCESS_TOKEN="YOUR_NATURE_REMO_ACCESS_TOKEN")
    del env["SPEAKER_SIGNAL_ID"]
    config = load_config(env, dotenv=False)
    assert config.missing() == ["REMO_ACCESS_TOKEN", "SPEAKER_SIGNAL_ID"]


def test_optional_overrides():
    env = dict(
        ENV,
        REMO_SHEET_NAME="humidity",
        REMO_UPDATE_INTERVAL="60",
        REMO_LOG_LEVEL="debug",
        REMO_TOKEN_PATH="/var/lib/remo/token.json",
    )
    config = load_config(env, dotenv=False)
    assert config.sheet_name == "humidity"
    assert config.update_interval == 60.0
    assert config.log_level == "DEBUG"
    assert config.token_path == "/var/lib/remo/token.json"


def test_bad_interval_falls_back_to_default():
    for raw in ("soon", "0", "-5"):
        config = load_config(dict(ENV, REMO_UPDATE_INTERVAL=raw), dotenv=False)
        assert config.update_interval == DEFAULT_SCAN_INTERVAL
