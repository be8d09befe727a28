"""Configuration management for the Ration Planner application."""
import os
from typing import Final, Optional
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _private_key(raw: Optional[str]) -> Optional[str]:
    """Keys pasted into a single env line carry literal '\\n' sequences."""
    if not raw:
        return None
    return raw.replace('\\n', '\n')


# Spreadsheet
RATION_SHEET_ID: Final[str] = os.getenv('RATION_SHEET_ID', '')
RATIONS_SHEET_NAME: Final[str] = os.getenv('RATIONS_SHEET_NAME', 'Rations')
NAMELIST_SHEET_NAME: Final[str] = os.getenv('NAMELIST_SHEET_NAME', 'Namelist')

# Service account
GOOGLE_SERVICE_EMAIL: Final[str] = os.getenv('GOOGLE_SERVICE_EMAIL', '')
GOOGLE_PRIVATE_KEY: Final[Optional[str]] = _private_key(os.getenv('GOOGLE_PRIVATE_KEY'))
GOOGLE_TOKEN_URI: Final[str] = os.getenv('GOOGLE_TOKEN_URI', 'https://oauth2.googleapis.com/token')

# Booking rules
NAMELIST_TTL_SECONDS: Final[float] = float(os.getenv('NAMELIST_TTL_SECONDS', '60'))
BOOKING_LEAD_DAYS: Final[int] = int(os.getenv('BOOKING_LEAD_DAYS', '14'))

# Application Settings
ENV_NAME: Final[str] = os.getenv('ENV_NAME', 'local')
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
RATION_API_BASE_URL: Final[str] = os.getenv('RATION_API_BASE_URL', f'http://localhost:{APP_PORT}')

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = BASE_DIR / 'data'
