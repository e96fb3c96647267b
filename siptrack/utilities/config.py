"""Configuration management for SipTrack."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# AI Configuration
OPENAI_API_KEY: Final[str] = os.getenv('OPENAI_API_KEY', '')
OPENAI_MODEL: Final[str] = os.getenv('OPENAI_MODEL', 'gpt-4o-mini')

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'INFO').upper()

# Records are partitioned by this id when the request does not name a user
DEFAULT_USER_ID: Final[str] = os.getenv('DEFAULT_USER_ID', 'local')

# First day of the week for weekly buckets: 0=Sunday .. 6=Saturday
WEEK_START: Final[int] = int(os.getenv('WEEK_START', '0')) % 7

# How the dashboard reads a trend direction, per metric
LOWER_IS_BETTER: Final[str] = 'lower_is_better'
HIGHER_IS_BETTER: Final[str] = 'higher_is_better'
TREND_POLARITY: Final[dict[str, str]] = {
    'drinks': os.getenv('TREND_POLARITY_DRINKS', LOWER_IS_BETTER),
    'spent': os.getenv('TREND_POLARITY_SPENT', LOWER_IS_BETTER),
    'calories': os.getenv('TREND_POLARITY_CALORIES', LOWER_IS_BETTER),
    'weight_gain': os.getenv('TREND_POLARITY_WEIGHT_GAIN', LOWER_IS_BETTER),
    'mood': os.getenv('TREND_POLARITY_MOOD', HIGHER_IS_BETTER),
}

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('SIPTRACK_DATA_DIR', str(BASE_DIR / 'data')))
TEMPLATES_DIR: Final[Path] = BASE_DIR / 'templates'
