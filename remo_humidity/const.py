# Nature Remo cloud API
REMO_BASE_URL = "https://api.nature.global/1"
REMO_DEVICES_ENDPOINT = "devices"

# Google Sheets
SHEETS_BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
DEFAULT_SHEET_NAME = "sensor"
SHEET_COLUMNS = "A:Z"

# Threshold cell positions in the sheet (row, column), 0-indexed
CELL_LOW = (1, 3)
CELL_HIGH = (2, 3)
CELL_MODE = (1, 4)

MODE_OFF = "OFF"

# Local files, relative to the working directory
DEFAULT_TOKEN_PATH = "token.json"
DEFAULT_CREDENTIALS_PATH = "credentials.json"

DEFAULT_SCAN_INTERVAL = 300  # seconds

# Environment variable names
ENV_SPREADSHEET_ID = "YOUR_SPREADSHEET_ID"
ENV_ACCESS_TOKEN = "REMO_ACCESS_TOKEN"
ENV_SPEAKER_SIGNAL_ID = "SPEAKER_SIGNAL_ID"
ENV_HUMIDIFIER_SIGNAL_ID = "HUMIDIFIER_SIGNAL_ID"
ENV_TOKEN_PATH = "REMO_TOKEN_PATH"
ENV_CREDENTIALS_PATH = "REMO_CREDENTIALS_PATH"
ENV_SHEET_NAME = "REMO_SHEET_NAME"
ENV_UPDATE_INTERVAL = "REMO_UPDATE_INTERVAL"
ENV_LOG_LEVEL = "REMO_LOG_LEVEL"

# Placeholder values shipped in example .env files
PLACEHOLDER_ACCESS_TOKEN = "YOUR_NATURE_REMO_ACCESS_TOKEN"
PLACEHOLDER_SIGNAL_ID = "YOUR_NATURE_REMO_SIGNAL_ID"
PLACEHOLDER_SPREADSHEET_ID = "YOUR_SPREADSHEET_ID"
